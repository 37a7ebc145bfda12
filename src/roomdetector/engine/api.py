"""Core API for room detection.

This module composes the pipeline stages into the public entry points:
polyline expansion, topology normalization, splitting, graph construction,
face extraction and room assembly. Every call recomputes everything from
the given walls; no state survives between calls.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, DetectionConfig
from ..core.faces import Closed, DeadEnd, SafetyAborted, extract_faces
from ..core.model import Room, Segment, WallSegment
from ..core.topology import PlanarGraph, build_planar_graph
from ..geom.normalize import expand_walls, normalize
from ..geom.split import split_segments
from .diagnostics import (
    DEAD_END,
    MALFORMED_WALL,
    SAFETY_ABORTED,
    SNAP_LIMIT_REACHED,
    DetectionReport,
    Diagnostic,
)
from .rooms import assemble_rooms

LOGGER = logging.getLogger(__name__)


def build_graph(
    walls: Iterable[WallSegment], config: Optional[DetectionConfig] = None
) -> PlanarGraph:
    """Normalize, split and build the planar graph for a set of walls."""
    segments, malformed = expand_walls(walls)
    graph, _ = _build_graph(segments, malformed, config or DEFAULT_CONFIG)
    return graph


def _build_graph(segments: Sequence[Segment], malformed: Sequence[str], config: DetectionConfig):
    diagnostics: List[Diagnostic] = []
    for wall_id in malformed:
        LOGGER.debug("Wall %s has no segment of non-zero length", wall_id)
        diagnostics.append(Diagnostic(MALFORMED_WALL, "Wall has no segment of non-zero length", wall_id))

    normalized = normalize(segments, config)
    if not normalized.converged:
        diagnostics.append(
            Diagnostic(
                SNAP_LIMIT_REACHED,
                f"T-junction snapping still moving nodes after {normalized.passes} passes",
            )
        )

    fragments = split_segments(normalized.segments, config.epsilon)
    graph = build_planar_graph(fragments, config.node_merge_dist)
    return graph, diagnostics


def detect_rooms_with_report(
    walls: Iterable[WallSegment], config: Optional[DetectionConfig] = None
) -> DetectionReport:
    """Detect rooms and report every wall or face that was skipped.

    Args:
        walls: Wall centerlines; each polyline contributes one segment per
            consecutive point pair.
        config: Detection tolerances; defaults when omitted.

    Returns:
        DetectionReport with rooms sorted by ID and diagnostics in
        pipeline order.
    """
    config = config or DEFAULT_CONFIG
    walls = list(walls)

    segments, malformed = expand_walls(walls)
    if len(segments) < config.min_walls:
        LOGGER.debug("Only %d effective wall segments, no rooms possible", len(segments))
        return DetectionReport(rooms=())

    graph, diagnostics = _build_graph(segments, malformed, config)

    cycles = []
    for outcome in extract_faces(graph, config.max_walk_steps):
        if isinstance(outcome, Closed):
            cycles.append(outcome.cycle)
        elif isinstance(outcome, DeadEnd):
            diagnostics.append(
                Diagnostic(DEAD_END, f"Face walk stopped ({outcome.reason})", outcome.node)
            )
        elif isinstance(outcome, SafetyAborted):
            diagnostics.append(
                Diagnostic(
                    SAFETY_ABORTED,
                    f"Face walk exceeded {outcome.steps} steps",
                    outcome.start[0],
                )
            )

    rooms, rejected = assemble_rooms(graph, cycles, config)
    diagnostics.extend(rejected)

    LOGGER.info(
        "Detected %d rooms from %d walls (%d nodes, %d edges, %d skipped)",
        len(rooms), len(walls), len(graph.nodes), len(graph.edges), len(diagnostics),
    )
    return DetectionReport(rooms=tuple(rooms), diagnostics=tuple(diagnostics))


def detect_rooms(
    walls: Iterable[WallSegment], config: Optional[DetectionConfig] = None
) -> List[Room]:
    """Detect the closed rooms enclosed by a set of walls.

    Args:
        walls: Wall centerlines.
        config: Detection tolerances; defaults when omitted.

    Returns:
        Rooms sorted by ID. Empty when fewer than three effective wall
        segments are given or nothing closes.
    """
    return list(detect_rooms_with_report(walls, config).rooms)


def story_room_id(story_id: Optional[str], rid: str) -> str:
    """Room ID qualified by its story, so IDs stay unique across stories."""
    return rid if story_id is None else f"{story_id}:{rid}"


def detect_rooms_by_story_with_report(
    walls: Iterable[WallSegment], config: Optional[DetectionConfig] = None
) -> DetectionReport:
    """Detect rooms separately for each story and merge the reports.

    Walls are grouped by story_id (walls without one form their own group),
    detection runs on each group independently and every room and
    diagnostic is tagged with the story it came from. Rooms on a story get
    IDs of the form "<story_id>:room-...".

    Returns:
        DetectionReport with rooms and diagnostics ordered by story
        (unassigned first), rooms then by ID.
    """
    groups: Dict[Optional[str], List[WallSegment]] = {}
    for wall in walls:
        groups.setdefault(wall.story_id, []).append(wall)

    rooms: List[Room] = []
    diagnostics: List[Diagnostic] = []
    for story_id in sorted(groups, key=lambda s: (s is not None, s or "")):
        report = detect_rooms_with_report(groups[story_id], config)
        for room in report.rooms:
            rooms.append(replace(room, id=story_room_id(story_id, room.id), story_id=story_id))
        diagnostics.extend(replace(d, story_id=story_id) for d in report.diagnostics)

    LOGGER.debug("Detected rooms on %d stories", len(groups))
    return DetectionReport(rooms=tuple(rooms), diagnostics=tuple(diagnostics))


def detect_rooms_by_story(
    walls: Iterable[WallSegment], config: Optional[DetectionConfig] = None
) -> List[Room]:
    """Detect rooms separately for each story.

    Returns:
        Rooms ordered by story (unassigned first) and then by ID; see
        detect_rooms_by_story_with_report.
    """
    return list(detect_rooms_by_story_with_report(walls, config).rooms)
