"""Polygon measurements for room outlines."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LinearRing

from ..core.model import Point


def signed_area(points: Sequence[Point]) -> float:
    """Shoelace area; the sign encodes the winding of the ring."""
    n = len(points)
    s = 0.0
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        s += (a.x * b.y) - (b.x * a.y)
    return 0.5 * s


def perimeter(points: Sequence[Point]) -> float:
    """Sum of the edge lengths of the closed ring."""
    n = len(points)
    return math.fsum(
        math.hypot(points[(i + 1) % n].x - points[i].x, points[(i + 1) % n].y - points[i].y)
        for i in range(n)
    )


def is_simple_ring(points: Sequence[Point]) -> bool:
    """Check that the closed ring through points does not touch itself."""
    if len(points) < 3:
        return False
    coords = [(p.x, p.y) for p in points]
    if len(set(coords)) != len(coords):
        return False
    return LinearRing(coords).is_simple
