"""Geometry utilities for room detection.

This module provides the tolerance-aware primitives, the topology
normalizer and the segment splitter that prepare raw walls for graph
construction, plus polygon measurements for the resulting rooms.
"""

from .normalize import expand_walls, normalize
from .polygon import is_simple_ring, perimeter, signed_area
from .primitives import intersect, project_point_to_segment
from .split import split_segments

__all__ = [
    "expand_walls",
    "intersect",
    "is_simple_ring",
    "normalize",
    "perimeter",
    "project_point_to_segment",
    "signed_area",
    "split_segments",
]
