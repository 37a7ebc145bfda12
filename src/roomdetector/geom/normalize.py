"""Topology normalization of raw wall segments.

Two passes turn hand-drawn, noisy walls into a consistent set of segments:

1. Endpoint clustering: every segment endpoint is a site; sites closer
   than the snap distance are merged with union-find and replaced by the
   centroid of their group.
2. T-junction snapping: a node lying close to the interior of another
   segment is moved onto it, so the splitter later cuts that segment there.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..config import COORD_DIGITS, DEFAULT_CONFIG, DetectionConfig
from ..core.model import Point, Segment, WallSegment
from .primitives import project_point_to_segment

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Site:
    """A segment endpoint taking part in clustering."""

    x: float
    y: float
    owner: int
    is_start: bool


@dataclass(frozen=True)
class NormalizationResult:
    """Output of the normalizer.

    Attributes:
        segments: Segments with endpoints moved onto their node positions.
        node_count: Number of distinct endpoint nodes after clustering.
        snapped: Number of T-junction relocations performed.
        passes: Number of snapping passes run.
        converged: False if the last allowed pass still moved a node.
    """

    segments: tuple[Segment, ...]
    node_count: int
    snapped: int
    passes: int
    converged: bool


class DisjointSet:
    """Union-find over integer indices with path compression."""

    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> None:
        ri, rj = self.find(i), self.find(j)
        if ri != rj:
            self.parent[ri] = rj


def expand_walls(walls: Iterable[WallSegment]) -> Tuple[List[Segment], List[str]]:
    """Split polyline walls into straight segments.

    Returns:
        A tuple (segments, malformed) where malformed lists the IDs of walls
        that contribute no segment of non-zero length.
    """
    segments = []
    malformed = []
    for wall in walls:
        pieces = [
            Segment(wall.id, a, b)
            for a, b in zip(wall.points, wall.points[1:])
            if (a.x, a.y) != (b.x, b.y)
        ]
        if not pieces:
            malformed.append(wall.id)
            continue
        segments.extend(pieces)
    return segments, malformed


def _sites(segments: Sequence[Segment]) -> List[Site]:
    sites = []
    for i, seg in enumerate(segments):
        sites.append(Site(seg.start.x, seg.start.y, i, True))
        sites.append(Site(seg.end.x, seg.end.y, i, False))
    return sites


def cluster_sites(sites: Sequence[Site], snap_dist: float) -> Tuple[List[int], List[Point]]:
    """Group sites closer than snap_dist and place each group at its centroid.

    Args:
        sites: Segment endpoints to cluster.
        snap_dist: Merge distance (strict).

    Returns:
        A tuple (labels, nodes): labels[i] is the node index of sites[i] and
        nodes holds the centroid of each group. Node indices follow the
        sorted centroid coordinates, so they don't depend on input order.
    """
    if not sites:
        return [], []

    coords = np.array([(s.x, s.y) for s in sites], dtype=float)
    diff = coords[:, None, :] - coords[None, :, :]
    close = np.einsum("ijk,ijk->ij", diff, diff) < snap_dist * snap_dist

    dsu = DisjointSet(len(sites))
    for i, j in zip(*np.nonzero(np.triu(close, k=1))):
        dsu.union(int(i), int(j))

    groups: Dict[int, List[int]] = {}
    for i in range(len(sites)):
        groups.setdefault(dsu.find(i), []).append(i)

    centroids = []
    for members in groups.values():
        n = len(members)
        cx = math.fsum(sites[i].x for i in members) / n
        cy = math.fsum(sites[i].y for i in members) / n
        centroids.append((Point(cx, cy), members))

    centroids.sort(key=lambda item: (round(item[0].x, COORD_DIGITS), round(item[0].y, COORD_DIGITS)))

    labels = [0] * len(sites)
    nodes = []
    for index, (point, members) in enumerate(centroids):
        nodes.append(point)
        for i in members:
            labels[i] = index
    return labels, nodes


def snap_t_junctions(
    nodes: List[Point],
    ends: Sequence[Tuple[int, int]],
    config: DetectionConfig = DEFAULT_CONFIG,
) -> Tuple[int, int, bool]:
    """Move nodes lying near the interior of a segment onto that segment.

    Segments are given by node indices, so moving a node moves every
    segment endpoint that references it. Nodes are updated in place.
    When several segments qualify, the node moves onto the nearest one.

    Args:
        nodes: Node positions, indexed by node index.
        ends: (start_node, end_node) for each segment.
        config: Detection tolerances.

    Returns:
        A tuple (snapped, passes, converged).
    """
    lo = config.t_junction_margin
    hi = 1.0 - config.t_junction_margin
    snapped = 0
    passes = 0
    changed = True

    while changed and passes < config.max_snap_passes:
        changed = False
        passes += 1
        for node in range(len(nodes)):
            candidates = []
            for u, v in ends:
                if node in (u, v):
                    continue
                proj = project_point_to_segment(nodes[node], nodes[u], nodes[v])
                if not (config.epsilon < proj.distance < config.snap_dist):
                    continue
                if lo < proj.t < hi:
                    candidates.append((proj.distance, min(u, v), max(u, v), proj))
            if not candidates:
                continue

            # Nearest segment wins; ties go to the lowest node pair
            dist, u, v, proj = min(candidates, key=lambda c: c[:3])
            LOGGER.debug(
                "T-junction: node %d moved %.4f onto segment %d-%d at t=%.3f",
                node, dist, u, v, proj.t,
            )
            nodes[node] = proj.point
            snapped += 1
            changed = True

    return snapped, passes, not changed


def normalize(
    segments: Sequence[Segment], config: DetectionConfig = DEFAULT_CONFIG
) -> NormalizationResult:
    """Cluster endpoints and snap T-junctions.

    Args:
        segments: Straight wall segments.
        config: Detection tolerances.

    Returns:
        NormalizationResult with the relocated segments.
    """
    sites = _sites(segments)
    labels, nodes = cluster_sites(sites, config.snap_dist)
    ends = [(labels[2 * i], labels[2 * i + 1]) for i in range(len(segments))]
    LOGGER.debug("Clustered %d sites into %d nodes", len(sites), len(nodes))

    snapped, passes, converged = snap_t_junctions(nodes, ends, config)
    if not converged:
        LOGGER.debug("T-junction snapping stopped after %d passes without converging", passes)

    moved = tuple(
        Segment(seg.wall_id, nodes[u], nodes[v]) for seg, (u, v) in zip(segments, ends)
    )
    return NormalizationResult(
        segments=moved,
        node_count=len(nodes),
        snapped=snapped,
        passes=passes,
        converged=converged,
    )
