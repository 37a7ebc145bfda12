"""Face extraction from the planar wall graph.

Every undirected edge gives two half-edges (u -> v and v -> u). Starting
from each unvisited half-edge we walk around a face: arriving at v from u,
we leave along the neighbor with the smallest strictly positive
counter-clockwise offset from the direction back to u. Repeating the same
rotational choice at every node traces exactly one face per walk, the
bounded faces with negative signed area and the outer face with positive.

Each walk ends in one of three tagged outcomes, so callers can tell a
closed cycle from the ways a walk can fail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, List, Literal, Optional, Set, Tuple, Union

from ..config import MAX_WALK_STEPS
from .model import Point
from .topology import PlanarGraph

LOGGER = logging.getLogger(__name__)

HalfEdge = Tuple[str, str]

COLLINEAR_TOLERANCE = 1e-12  # Relative |cross| treated as collinear


@dataclass(frozen=True)
class Closed:
    """A walk that returned to its start node."""

    cycle: tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "closed", "cycle": list(self.cycle)}


@dataclass(frozen=True)
class DeadEnd:
    """A walk that could not continue.

    Attributes:
        start: The half-edge the walk started from.
        node: The node where the walk stopped.
        reason: "degree" if the node has fewer than two neighbors,
            "no_turn" if no outgoing half-edge qualifies, "visited" if the
            next half-edge was already used by another walk.
    """

    start: HalfEdge
    node: str
    reason: Literal["degree", "no_turn", "visited"]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "dead_end", "start": list(self.start), "node": self.node, "reason": self.reason}


@dataclass(frozen=True)
class SafetyAborted:
    """A walk stopped by the step cap."""

    start: HalfEdge
    steps: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "safety_aborted", "start": list(self.start), "steps": self.steps}


WalkOutcome = Union[Closed, DeadEnd, SafetyAborted]


def _turn_class(back: Tuple[float, float], d: Tuple[float, float]) -> int:
    """Classify d by its counter-clockwise offset from back.

    0: offset in (0, pi), 1: offset == pi, 2: offset in (pi, 2 pi),
    3: offset == 0, which ranks last as a full turn.
    """
    cross = back[0] * d[1] - back[1] * d[0]
    dot = back[0] * d[0] + back[1] * d[1]
    scale = (back[0] ** 2 + back[1] ** 2) ** 0.5 * (d[0] ** 2 + d[1] ** 2) ** 0.5
    if abs(cross) <= COLLINEAR_TOLERANCE * scale:
        return 1 if dot < 0 else 3
    return 0 if cross > 0 else 2


def _compare_turns(back: Tuple[float, float]):
    def compare(a: Tuple[float, float], b: Tuple[float, float]) -> int:
        ca = _turn_class(back, a)
        cb = _turn_class(back, b)
        if ca != cb:
            return -1 if ca < cb else 1
        # Same half-plane: a comes first if b lies counter-clockwise of a
        cross = a[0] * b[1] - a[1] * b[0]
        if cross > 0:
            return -1
        if cross < 0:
            return 1
        return 0

    return compare


def next_neighbor(graph: PlanarGraph, u: str, v: str) -> Optional[str]:
    """Pick the node to visit after arriving at v from u.

    Among v's neighbors other than u, choose the one with the smallest
    strictly positive counter-clockwise offset from the direction v -> u.
    """
    vp: Point = graph.point(v)
    up: Point = graph.point(u)
    back = (up.x - vp.x, up.y - vp.y)

    candidates = []
    for n in graph.neighbors(v):
        if n == u:
            continue
        np_ = graph.point(n)
        candidates.append(((np_.x - vp.x, np_.y - vp.y), n))

    if not candidates:
        return None

    order = cmp_to_key(_compare_turns(back))
    return min(candidates, key=lambda c: order(c[0]))[1]


def walk_face(
    graph: PlanarGraph,
    start: HalfEdge,
    visited: Set[HalfEdge],
    max_steps: int = MAX_WALK_STEPS,
) -> WalkOutcome:
    """Walk the face to the right of a starting half-edge.

    Half-edges are added to visited as they are followed.

    Args:
        graph: The planar graph.
        start: Half-edge (u, v) to start from.
        visited: Half-edges already used; updated in place.
        max_steps: Safety cap on the number of half-edges followed.

    Returns:
        Closed with the node cycle, or DeadEnd / SafetyAborted.
    """
    path: List[str] = []
    current = start
    steps = 0

    while True:
        if current in visited:
            return DeadEnd(start=start, node=current[0], reason="visited")
        if steps >= max_steps:
            return SafetyAborted(start=start, steps=steps)

        visited.add(current)
        u, v = current
        path.append(u)
        steps += 1

        if v == start[0] and len(path) > 2:
            return Closed(cycle=tuple(path))

        if len(graph.neighbors(v)) < 2:
            return DeadEnd(start=start, node=v, reason="degree")

        nxt = next_neighbor(graph, u, v)
        if nxt is None:
            return DeadEnd(start=start, node=v, reason="no_turn")
        current = (v, nxt)


def extract_faces(graph: PlanarGraph, max_steps: int = MAX_WALK_STEPS) -> List[WalkOutcome]:
    """Walk every half-edge of the graph once.

    Components are processed one after another; within a component,
    half-edges are started in node order.

    Returns:
        One outcome per walk started.
    """
    visited: Set[HalfEdge] = set()
    outcomes: List[WalkOutcome] = []

    for component in graph.components():
        nodes = [n for n in graph.nodes if n in component]
        for u in nodes:
            for v in graph.neighbors(u):
                if (u, v) in visited:
                    continue
                outcomes.append(walk_face(graph, (u, v), visited, max_steps))

    closed = sum(1 for o in outcomes if isinstance(o, Closed))
    LOGGER.debug("Face walks: %d started, %d closed", len(outcomes), closed)
    return outcomes
