"""Engine module for room detection.

This module provides the entry points composing the detection pipeline
and the room assembler turning closed faces into rooms.
"""

from .api import (
    build_graph,
    detect_rooms,
    detect_rooms_by_story,
    detect_rooms_by_story_with_report,
    detect_rooms_with_report,
)
from .diagnostics import DetectionReport, Diagnostic

__all__ = [
    "DetectionReport",
    "Diagnostic",
    "build_graph",
    "detect_rooms",
    "detect_rooms_by_story",
    "detect_rooms_by_story_with_report",
    "detect_rooms_with_report",
]
