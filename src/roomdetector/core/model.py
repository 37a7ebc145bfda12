"""Core data models for room detection.

This module defines the value types flowing through the detection
pipeline: input walls, the planar graph built from them, and the rooms
extracted from that graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable

from shapely.geometry import Polygon


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in space.

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class WallSegment:
    """Represents a wall centerline drawn by the user.

    Attributes:
        id: Unique identifier for the wall.
        points: Ordered polyline points; consecutive pairs are straight segments.
        story_id: ID of the story the wall belongs to, if any.
    """

    id: str
    points: tuple[Point, ...]
    story_id: str | None = None

    @classmethod
    def from_coords(
        cls, wall_id: str, coords: Iterable[tuple[float, float]], story_id: str | None = None
    ) -> "WallSegment":
        """Build a wall from plain (x, y) pairs."""
        return cls(
            id=wall_id,
            points=tuple(Point(float(x), float(y)) for x, y in coords),
            story_id=story_id,
        )


@dataclass(frozen=True)
class Segment:
    """A single straight piece of a wall.

    Attributes:
        wall_id: ID of the wall this segment comes from.
        start: First endpoint.
        end: Second endpoint.
    """

    wall_id: str
    start: Point
    end: Point


@dataclass(frozen=True)
class Node:
    """A vertex of the planar wall graph.

    Attributes:
        id: Unique identifier for the node (e.g., "node-3").
        point: Location of the node.
        edge_ids: IDs of the edges incident to this node.
    """

    id: str
    point: Point
    edge_ids: tuple[str, ...] = ()


def node_order(node_id: str) -> int:
    """Numeric position of a node ID such as "node-12"."""
    return int(node_id.rsplit("-", 1)[1])


@dataclass(frozen=True)
class Edge:
    """An undirected edge of the planar wall graph.

    Attributes:
        id: Unique identifier for the edge.
        u: ID of the first node.
        v: ID of the second node.
        wall_id: ID of the wall the edge was cut from.
    """

    id: str
    u: str
    v: str
    wall_id: str

    def other(self, node_id: str) -> str:
        return self.v if node_id == self.u else self.u


@dataclass(frozen=True)
class Room:
    """Represents a closed room enclosed by walls.

    Attributes:
        id: Deterministic identifier derived from the sorted node IDs of the room.
        walls: Unique IDs of the walls bounding the room, in boundary order.
        polygon: Ordered boundary points, not closed by repeating the first point.
        area: Room area in square meters (positive).
        perimeter: Room perimeter in meters (positive).
        story_id: ID of the story the room was detected on, if any.
    """

    id: str
    walls: tuple[str, ...]
    polygon: tuple[Point, ...]
    area: float
    perimeter: float
    story_id: str | None = None

    def as_polygon(self) -> Polygon:
        """Return the room outline as a Shapely polygon."""
        return Polygon([(p.x, p.y) for p in self.polygon])

    def centroid(self) -> Point:
        """Return the area centroid of the room outline."""
        c = self.as_polygon().centroid
        return Point(c.x, c.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "walls": list(self.walls),
            "polygon": [p.to_dict() for p in self.polygon],
            "area": self.area,
            "perimeter": self.perimeter,
            "story_id": self.story_id,
        }
