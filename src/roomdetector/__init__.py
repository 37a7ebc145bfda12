"""Room Detector - find closed rooms in a set of 2D wall segments."""

__version__ = "0.1.0"
__author__ = "Marco"
__email__ = "marco@example.com"

from .config import DetectionConfig
from .core.model import Point, Room, WallSegment
from .engine.api import (
    detect_rooms,
    detect_rooms_by_story,
    detect_rooms_by_story_with_report,
    detect_rooms_with_report,
)

__all__ = [
    "DetectionConfig",
    "Point",
    "Room",
    "WallSegment",
    "detect_rooms",
    "detect_rooms_by_story",
    "detect_rooms_by_story_with_report",
    "detect_rooms_with_report",
]
