import unittest

from roomdetector.config import DetectionConfig
from roomdetector.core.model import Point, Segment, WallSegment
from roomdetector.geom.normalize import (
    DisjointSet,
    Site,
    cluster_sites,
    expand_walls,
    normalize,
    snap_t_junctions,
)


class ExpandWallsTests(unittest.TestCase):
    def test_polyline_becomes_segments(self):
        wall = WallSegment.from_coords("w1", [(0, 0), (5, 0), (5, 5)])
        segments, malformed = expand_walls([wall])
        self.assertEqual(malformed, [])
        self.assertEqual(
            segments,
            [
                Segment("w1", Point(0, 0), Point(5, 0)),
                Segment("w1", Point(5, 0), Point(5, 5)),
            ],
        )

    def test_malformed_walls_are_reported(self):
        walls = [
            WallSegment.from_coords("single", [(0, 0)]),
            WallSegment.from_coords("coincident", [(1, 1), (1, 1)]),
            WallSegment.from_coords("ok", [(0, 0), (1, 0)]),
        ]
        segments, malformed = expand_walls(walls)
        self.assertEqual(malformed, ["single", "coincident"])
        self.assertEqual(len(segments), 1)

    def test_repeated_polyline_point_is_skipped(self):
        wall = WallSegment.from_coords("w1", [(0, 0), (0, 0), (3, 0)])
        segments, _ = expand_walls([wall])
        self.assertEqual(segments, [Segment("w1", Point(0, 0), Point(3, 0))])


class DisjointSetTests(unittest.TestCase):
    def test_union_find(self):
        dsu = DisjointSet(5)
        dsu.union(0, 1)
        dsu.union(3, 4)
        dsu.union(1, 4)
        self.assertEqual(dsu.find(0), dsu.find(3))
        self.assertNotEqual(dsu.find(2), dsu.find(0))


class ClusterTests(unittest.TestCase):
    def test_close_sites_merge_at_centroid(self):
        sites = [
            Site(10.0, 0.0, 0, False),
            Site(10.0, 0.1, 1, True),
            Site(0.0, 0.0, 0, True),
        ]
        labels, nodes = cluster_sites(sites, 0.2)
        self.assertEqual(len(nodes), 2)
        self.assertEqual(labels[0], labels[1])
        merged = nodes[labels[0]]
        self.assertAlmostEqual(merged.x, 10.0)
        self.assertAlmostEqual(merged.y, 0.05)

    def test_far_sites_stay_apart(self):
        sites = [Site(10.0, 0.0, 0, False), Site(10.0, 0.5, 1, True)]
        labels, nodes = cluster_sites(sites, 0.2)
        self.assertEqual(len(nodes), 2)
        self.assertNotEqual(labels[0], labels[1])

    def test_chained_sites_merge_transitively(self):
        sites = [Site(0.0, 0.0, 0, True), Site(0.15, 0.0, 1, True), Site(0.3, 0.0, 2, True)]
        labels, nodes = cluster_sites(sites, 0.2)
        self.assertEqual(len(nodes), 1)
        self.assertAlmostEqual(nodes[0].x, 0.15)

    def test_node_order_does_not_depend_on_site_order(self):
        sites = [Site(5.0, 5.0, 0, True), Site(0.0, 0.0, 0, False), Site(5.0, 0.0, 1, True)]
        _, nodes = cluster_sites(sites, 0.2)
        _, nodes_rev = cluster_sites(list(reversed(sites)), 0.2)
        self.assertEqual(nodes, nodes_rev)
        self.assertEqual(nodes[0], Point(0.0, 0.0))

    def test_empty(self):
        self.assertEqual(cluster_sites([], 0.2), ([], []))


class TJunctionTests(unittest.TestCase):
    def test_node_near_segment_interior_is_moved(self):
        nodes = [Point(0, 0), Point(10, 0), Point(5, 0.1), Point(5, 10)]
        ends = [(0, 1), (2, 3)]
        snapped, passes, converged = snap_t_junctions(nodes, ends)
        self.assertEqual(snapped, 1)
        self.assertTrue(converged)
        self.assertEqual(passes, 2)
        self.assertAlmostEqual(nodes[2].x, 5.0)
        self.assertAlmostEqual(nodes[2].y, 0.0)

    def test_node_near_segment_end_is_not_moved(self):
        # t = 0.98 is inside the corner margin
        nodes = [Point(0, 0), Point(10, 0), Point(9.8, 0.1), Point(9.8, 10)]
        snapped, _, converged = snap_t_junctions(nodes, [(0, 1), (2, 3)])
        self.assertEqual(snapped, 0)
        self.assertTrue(converged)
        self.assertEqual(nodes[2], Point(9.8, 0.1))

    def test_node_already_on_segment_is_left_alone(self):
        nodes = [Point(0, 0), Point(10, 0), Point(5, 0), Point(5, 10)]
        snapped, passes, converged = snap_t_junctions(nodes, [(0, 1), (2, 3)])
        self.assertEqual((snapped, passes, converged), (0, 1, True))

    def test_nearest_segment_wins(self):
        # Node 4 is 0.15 from the upper segment and 0.1 from the lower one
        nodes = [Point(0, 0), Point(10, 0), Point(0, 0.25), Point(10, 0.25), Point(5, 0.1), Point(5, 10)]
        for ends in ([(2, 3), (0, 1), (4, 5)], [(0, 1), (2, 3), (4, 5)]):
            moved = list(nodes)
            snapped, _, converged = snap_t_junctions(moved, ends)
            self.assertEqual(snapped, 1)
            self.assertTrue(converged)
            self.assertAlmostEqual(moved[4].x, 5.0)
            self.assertAlmostEqual(moved[4].y, 0.0)

    def test_pass_limit(self):
        nodes = [Point(0, 0), Point(10, 0), Point(5, 0.1), Point(5, 10)]
        config = DetectionConfig(max_snap_passes=1)
        snapped, passes, converged = snap_t_junctions(nodes, [(0, 1), (2, 3)], config)
        self.assertEqual((snapped, passes), (1, 1))
        self.assertFalse(converged)


class NormalizeTests(unittest.TestCase):
    def test_shared_corner_within_tolerance(self):
        segments = [
            Segment("a", Point(0, 0), Point(10, 0)),
            Segment("b", Point(10, 0.05), Point(10, 10)),
        ]
        result = normalize(segments)
        self.assertEqual(result.node_count, 3)
        self.assertEqual(result.segments[0].end, result.segments[1].start)

    def test_t_junction_moves_every_reference(self):
        segments = [
            Segment("bottom", Point(0, 0), Point(10, 0)),
            Segment("stem", Point(5, 0.1), Point(5, 5)),
            Segment("arm", Point(5, 5), Point(8, 5)),
        ]
        result = normalize(segments)
        self.assertTrue(result.converged)
        self.assertEqual(result.snapped, 1)
        stem = result.segments[1]
        self.assertAlmostEqual(stem.start.y, 0.0)
        self.assertEqual(stem.end, result.segments[2].start)


if __name__ == "__main__":
    unittest.main()
