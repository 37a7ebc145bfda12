"""Turn closed face cycles into Room records."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from ..config import DEFAULT_CONFIG, DetectionConfig
from ..core.model import Room, node_order
from ..core.topology import PlanarGraph
from ..geom.polygon import is_simple_ring, perimeter, signed_area
from .diagnostics import (
    DUPLICATE_FACE,
    REJECTED_NOT_SIMPLE,
    REJECTED_ORIENTATION,
    REJECTED_TOO_LARGE,
    REJECTED_TOO_SMALL,
    Diagnostic,
)

LOGGER = logging.getLogger(__name__)


def room_id(cycle: Sequence[str]) -> str:
    """Deterministic room ID from the node IDs of a cycle."""
    return "room-" + "-".join(sorted(cycle))


def canonical_cycle(cycle: Sequence[str]) -> tuple[str, ...]:
    """Rotate a cycle to start at its lowest node, keeping its direction."""
    start = min(range(len(cycle)), key=lambda i: node_order(cycle[i]))
    return tuple(cycle[start:]) + tuple(cycle[:start])


def cycle_walls(graph: PlanarGraph, cycle: Sequence[str]) -> tuple[str, ...]:
    """Unique wall IDs along a cycle, in boundary order."""
    ids: List[str] = []
    for i, u in enumerate(cycle):
        v = cycle[(i + 1) % len(cycle)]
        edge = graph.edge_between(u, v)
        if edge is not None and edge.wall_id not in ids:
            ids.append(edge.wall_id)
    return tuple(ids)


def assemble_rooms(
    graph: PlanarGraph,
    cycles: Sequence[Sequence[str]],
    config: DetectionConfig = DEFAULT_CONFIG,
) -> Tuple[List[Room], List[Diagnostic]]:
    """Filter and measure candidate cycles.

    A cycle becomes a room when its signed area is below -min_room_area
    (interior winding and not snap noise), its absolute area is at most
    max_room_area, and its ring is simple.

    Args:
        graph: The planar graph the cycles were found in.
        cycles: Node ID cycles from the face extractor.
        config: Detection thresholds.

    Returns:
        A tuple (rooms, diagnostics); rooms are sorted by ID.
    """
    rooms: Dict[str, Room] = {}
    seen_cycles: Dict[str, tuple[str, ...]] = {}
    diagnostics: List[Diagnostic] = []

    for raw in cycles:
        cycle = canonical_cycle(raw)
        rid = room_id(cycle)
        polygon = tuple(graph.point(n) for n in cycle)
        area = signed_area(polygon)

        if area >= 0.0:
            diagnostics.append(Diagnostic(REJECTED_ORIENTATION, "Face has outer winding", rid, area))
            continue
        if area > -config.min_room_area:
            diagnostics.append(
                Diagnostic(REJECTED_TOO_SMALL, f"Face area {-area:.4f} below minimum", rid, area)
            )
            continue
        if -area > config.max_room_area:
            diagnostics.append(
                Diagnostic(REJECTED_TOO_LARGE, f"Face area {-area:.1f} above maximum", rid, area)
            )
            continue
        if not is_simple_ring(polygon):
            diagnostics.append(Diagnostic(REJECTED_NOT_SIMPLE, "Face boundary touches itself", rid, area))
            continue

        if rid in rooms:
            if seen_cycles[rid] != cycle:
                # Ids are keyed on the node set; the first cycle found keeps it
                diagnostics.append(
                    Diagnostic(DUPLICATE_FACE, "Another face shares this node set", rid, area)
                )
            continue

        seen_cycles[rid] = cycle
        rooms[rid] = Room(
            id=rid,
            walls=cycle_walls(graph, cycle),
            polygon=polygon,
            area=abs(area),
            perimeter=perimeter(polygon),
        )

    for d in diagnostics:
        LOGGER.debug("Skipped face %s: %s", d.subject, d.message)

    return [rooms[k] for k in sorted(rooms)], diagnostics
