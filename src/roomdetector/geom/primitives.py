"""Tolerance-aware segment primitives.

Segment-segment intersection and point-to-segment projection used by
every later stage of the pipeline. Both functions are pure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import EPSILON
from ..core.model import Point

PARALLEL_TOLERANCE = 1e-12  # |cross| below this (relative) means parallel


@dataclass(frozen=True)
class Projection:
    """Closest point on a segment to a query point.

    Attributes:
        t: Parametric position of the closest point, clamped to [0, 1].
        distance: Euclidean distance from the query point to the closest point.
        point: The closest point itself.
    """

    t: float
    distance: float
    point: Point


def _clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def distance(p1: Point, p2: Point) -> float:
    """Calculate Euclidean distance between two points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def lerp(s1: Point, s2: Point, t: float) -> Point:
    """Point at parameter t along the segment s1-s2."""
    return Point(s1.x + (s2.x - s1.x) * t, s1.y + (s2.y - s1.y) * t)


def intersect(
    p1: Point, p2: Point, p3: Point, p4: Point, epsilon: float = EPSILON
) -> Optional[Tuple[float, float]]:
    """Intersect segment p1-p2 with segment p3-p4.

    Args:
        p1, p2: Endpoints of the first segment.
        p3, p4: Endpoints of the second segment.
        epsilon: Slack allowed on each parameter outside [0, 1].

    Returns:
        (t1, t2) clamped to [0, 1], the parametric positions of the crossing
        along each segment, or None if the segments are parallel or the
        crossing lies outside either segment.
    """
    d1x, d1y = p2.x - p1.x, p2.y - p1.y
    d2x, d2y = p4.x - p3.x, p4.y - p3.y

    denom = d2y * d1x - d2x * d1y
    scale = math.hypot(d1x, d1y) * math.hypot(d2x, d2y)
    if scale == 0.0 or abs(denom) <= PARALLEL_TOLERANCE * scale:
        return None

    ox, oy = p1.x - p3.x, p1.y - p3.y
    ua = (d2x * oy - d2y * ox) / denom
    ub = (d1x * oy - d1y * ox) / denom

    lo, hi = -epsilon, 1.0 + epsilon
    if lo <= ua <= hi and lo <= ub <= hi:
        return _clamp01(ua), _clamp01(ub)
    return None


def project_point_to_segment(p: Point, s1: Point, s2: Point) -> Projection:
    """Project a point onto the segment s1-s2.

    Degenerate segments (s1 == s2) project everything onto s1 with t = 0.
    """
    vx, vy = s2.x - s1.x, s2.y - s1.y
    l2 = vx * vx + vy * vy
    if l2 == 0.0:
        return Projection(t=0.0, distance=distance(p, s1), point=s1)

    t = _clamp01(((p.x - s1.x) * vx + (p.y - s1.y) * vy) / l2)
    closest = lerp(s1, s2, t)
    return Projection(t=t, distance=distance(p, closest), point=closest)
