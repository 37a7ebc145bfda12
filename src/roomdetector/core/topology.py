"""Planar graph construction from wall fragments.

This module merges fragment endpoints into nodes and builds the undirected
edge set walked by the face extractor. Each edge remembers the wall it was
cut from, so rooms can be attributed back to the walls that bound them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Set

import networkx as nx

from ..config import COORD_DIGITS, NODE_MERGE_DIST
from .model import Edge, Node, Point, Segment, node_order

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanarGraph:
    """Planar straight-line graph of wall fragments.

    Attributes:
        nodes: Mapping of node ID to Node objects.
        edges: Edges in creation order.
        graph: NetworkX graph over node IDs; each edge carries the ``edge``
            and ``wall_id`` of the first fragment joining its two nodes.
    """

    nodes: Mapping[str, Node]
    edges: tuple[Edge, ...]
    graph: nx.Graph

    def point(self, node_id: str) -> Point:
        return self.nodes[node_id].point

    def neighbors(self, node_id: str) -> List[str]:
        """Neighbor node IDs in sorted order."""
        return sorted(self.graph.neighbors(node_id), key=node_order)

    def edge_between(self, u: str, v: str) -> Optional[Edge]:
        """Return the edge joining u and v, if any."""
        data = self.graph.get_edge_data(u, v)
        if data is None:
            return None
        return data["edge"]

    def components(self) -> List[Set[str]]:
        """Connected components, ordered by their smallest node ID."""
        return sorted(
            (set(c) for c in nx.connected_components(self.graph)),
            key=lambda c: node_order(min(c, key=node_order)),
        )


def _fragment_key(frag: Segment):
    a = (round(frag.start.x, COORD_DIGITS), round(frag.start.y, COORD_DIGITS))
    b = (round(frag.end.x, COORD_DIGITS), round(frag.end.y, COORD_DIGITS))
    return (min(a, b), max(a, b), frag.wall_id)


def build_planar_graph(
    fragments: Sequence[Segment], merge_dist: float = NODE_MERGE_DIST
) -> PlanarGraph:
    """Build the planar graph from split fragments.

    Fragment endpoints closer than merge_dist resolve to the same node.
    Fragments whose two endpoints resolve to the same node are dropped.

    Args:
        fragments: Non-crossing wall fragments.
        merge_dist: Node merge distance.

    Returns:
        PlanarGraph whose node IDs are numbered by sorted node coordinates.
    """
    points: List[Point] = []

    def get_node(p: Point) -> int:
        for i, q in enumerate(points):
            if math.hypot(p.x - q.x, p.y - q.y) < merge_dist:
                return i
        points.append(p)
        return len(points) - 1

    raw_edges = []
    dropped = 0
    for frag in sorted(fragments, key=_fragment_key):
        u = get_node(frag.start)
        v = get_node(frag.end)
        if u == v:
            dropped += 1
            continue
        raw_edges.append((u, v, frag.wall_id))

    order = sorted(
        range(len(points)),
        key=lambda i: (round(points[i].x, COORD_DIGITS), round(points[i].y, COORD_DIGITS)),
    )
    rename = {old: f"node-{new}" for new, old in enumerate(order)}

    incident: Dict[str, List[str]] = {rename[i]: [] for i in range(len(points))}
    edges = []
    graph = nx.Graph()
    graph.add_nodes_from(incident)
    for index, (u, v, wall_id) in enumerate(raw_edges):
        edge = Edge(id=f"edge-{index}", u=rename[u], v=rename[v], wall_id=wall_id)
        edges.append(edge)
        incident[edge.u].append(edge.id)
        incident[edge.v].append(edge.id)
        if not graph.has_edge(edge.u, edge.v):
            graph.add_edge(edge.u, edge.v, edge=edge, wall_id=wall_id)

    nodes = {
        rename[i]: Node(id=rename[i], point=points[i], edge_ids=tuple(incident[rename[i]]))
        for i in order
    }

    LOGGER.debug(
        "Built graph: %d nodes, %d edges (%d zero-length fragments dropped)",
        len(nodes), len(edges), dropped,
    )
    return PlanarGraph(nodes=nodes, edges=tuple(edges), graph=graph)
