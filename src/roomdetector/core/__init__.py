"""Core data models and graph structures for room detection."""

from .faces import Closed, DeadEnd, SafetyAborted, extract_faces, walk_face
from .model import Edge, Node, Point, Room, Segment, WallSegment
from .topology import PlanarGraph, build_planar_graph

__all__ = [
    "Closed",
    "DeadEnd",
    "Edge",
    "Node",
    "PlanarGraph",
    "Point",
    "Room",
    "SafetyAborted",
    "Segment",
    "WallSegment",
    "build_planar_graph",
    "extract_faces",
    "walk_face",
]
