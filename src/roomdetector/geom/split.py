"""Cut normalized segments into non-crossing fragments."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ..config import EPSILON
from ..core.model import Segment
from .primitives import distance, intersect, lerp, project_point_to_segment

LOGGER = logging.getLogger(__name__)


def _split_parameters(segments: Sequence[Segment], epsilon: float) -> Dict[int, List[float]]:
    """Collect interior cut positions for every segment."""
    splits: Dict[int, List[float]] = {}

    def add(index: int, t: float) -> None:
        if t <= epsilon or t >= 1.0 - epsilon:
            return
        splits.setdefault(index, []).append(t)

    for i, s1 in enumerate(segments):
        for j in range(i + 1, len(segments)):
            s2 = segments[j]
            hit = intersect(s1.start, s1.end, s2.start, s2.end, epsilon)
            if hit is not None:
                add(i, hit[0])
                add(j, hit[1])

        # Endpoints of other segments resting on this one (T-junctions)
        for j, s2 in enumerate(segments):
            if i == j:
                continue
            for p in (s2.start, s2.end):
                proj = project_point_to_segment(p, s1.start, s1.end)
                if proj.distance < epsilon:
                    add(i, proj.t)

    return splits


def _dedupe(ts: List[float], epsilon: float) -> List[float]:
    kept: List[float] = []
    for t in sorted(ts):
        if not kept or t - kept[-1] > epsilon:
            kept.append(t)
    return kept


def split_segments(segments: Sequence[Segment], epsilon: float = EPSILON) -> List[Segment]:
    """Cut every segment at its intersections and T-points.

    Args:
        segments: Normalized segments.
        epsilon: Parametric and distance tolerance.

    Returns:
        Fragments of non-zero length; each keeps the wall ID of its segment.
    """
    splits = _split_parameters(segments, epsilon)
    fragments = []

    for index, seg in enumerate(segments):
        current = seg.start
        for t in _dedupe(splits.get(index, []), epsilon):
            nxt = lerp(seg.start, seg.end, t)
            if distance(current, nxt) > epsilon:
                fragments.append(Segment(seg.wall_id, current, nxt))
                current = nxt
        if distance(current, seg.end) > epsilon:
            fragments.append(Segment(seg.wall_id, current, seg.end))

    LOGGER.debug("Split %d segments into %d fragments", len(segments), len(fragments))
    return fragments
