import unittest

from roomdetector.core.model import Point, Segment
from roomdetector.core.topology import build_planar_graph


def _square(size=10.0):
    corners = [(0, 0), (size, 0), (size, size), (0, size)]
    return [
        Segment(f"w{i + 1}", Point(*corners[i]), Point(*corners[(i + 1) % 4]))
        for i in range(4)
    ]


class GraphBuilderTests(unittest.TestCase):
    def test_square_graph(self):
        graph = build_planar_graph(_square())
        self.assertEqual(len(graph.nodes), 4)
        self.assertEqual(len(graph.edges), 4)
        for node in graph.nodes.values():
            self.assertEqual(len(node.edge_ids), 2)
            self.assertEqual(len(graph.neighbors(node.id)), 2)

    def test_node_ids_follow_coordinates(self):
        graph = build_planar_graph(list(reversed(_square())))
        points = [graph.point(f"node-{i}") for i in range(4)]
        self.assertEqual(points, [Point(0, 0), Point(0, 10), Point(10, 0), Point(10, 10)])

    def test_endpoints_within_merge_distance_share_a_node(self):
        fragments = [
            Segment("a", Point(0, 0), Point(5, 0)),
            Segment("b", Point(5.03, 0), Point(5, 5)),
        ]
        graph = build_planar_graph(fragments)
        self.assertEqual(len(graph.nodes), 3)

    def test_finer_than_clustering(self):
        fragments = [
            Segment("a", Point(0, 0), Point(5, 0)),
            Segment("b", Point(5.1, 0), Point(5, 5)),
        ]
        graph = build_planar_graph(fragments)
        self.assertEqual(len(graph.nodes), 4)

    def test_zero_length_fragment_is_dropped(self):
        fragments = [
            Segment("a", Point(0, 0), Point(5, 0)),
            Segment("tiny", Point(5, 0), Point(5.01, 0)),
        ]
        graph = build_planar_graph(fragments)
        self.assertEqual(len(graph.edges), 1)
        self.assertEqual(graph.edges[0].wall_id, "a")

    def test_edge_between_resolves_wall(self):
        graph = build_planar_graph(_square())
        edge = graph.edge_between("node-0", "node-2")
        self.assertIsNotNone(edge)
        self.assertEqual(edge.wall_id, "w1")
        self.assertEqual(edge.other("node-0"), "node-2")
        self.assertIsNone(graph.edge_between("node-0", "node-3"))

    def test_components(self):
        fragments = _square() + [
            Segment("x1", Point(20, 0), Point(25, 0)),
            Segment("x2", Point(25, 0), Point(25, 5)),
        ]
        graph = build_planar_graph(fragments)
        components = graph.components()
        self.assertEqual(len(components), 2)
        self.assertIn("node-0", components[0])
        self.assertEqual(len(components[1]), 3)


if __name__ == "__main__":
    unittest.main()
