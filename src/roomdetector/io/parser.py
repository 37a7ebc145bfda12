"""Parser for wall JSON files and writer for detected rooms.

Walls are read from a JSON object with a "walls" entry, given either as
a list of records carrying an "id" or as a mapping of wall ID to record.
Each record gives its geometry as "points" or as an SVG "path".
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..core.model import Point, Room, WallSegment

_SVG_COMMAND = re.compile(r"([ML])\s*([-+]?[0-9.eE+-]+)[\s,]+([-+]?[0-9.eE+-]+)")


def _parse_svg_path(svg_path: str) -> tuple[Point, ...]:
    """Parse SVG path string into polyline points.

    Args:
        svg_path: SVG path string in format "M x1,y1 L x2,y2 [L x3,y3 ...]".

    Returns:
        Tuple of points in path order.

    Raises:
        ValueError: If the SVG path format is invalid.
    """
    text = svg_path.strip()
    commands = _SVG_COMMAND.findall(text)
    if not commands or commands[0][0] != "M" or any(c != "L" for c, _, _ in commands[1:]):
        raise ValueError(f"Invalid SVG path format: {svg_path}")
    if len(_SVG_COMMAND.sub("", text).strip()) > 0:
        raise ValueError(f"Invalid SVG path format: {svg_path}")

    return tuple(Point(float(x), float(y)) for _, x, y in commands)


def _parse_point(raw: Any) -> Point:
    if isinstance(raw, dict):
        return Point(float(raw["x"]), float(raw["y"]))
    x, y = raw
    return Point(float(x), float(y))


def parse_wall(wall_id: str, wall_data: Dict[str, Any]) -> WallSegment:
    """Build a WallSegment from one JSON wall record.

    Raises:
        ValueError: If the record has neither usable "points" nor "path".
    """
    try:
        if "points" in wall_data:
            points = tuple(_parse_point(p) for p in wall_data["points"])
        elif "path" in wall_data:
            points = _parse_svg_path(wall_data["path"])
        else:
            raise ValueError("missing 'points' or 'path'")

        story = wall_data.get("story_id", wall_data.get("story"))
        return WallSegment(
            id=str(wall_id),
            points=points,
            story_id=None if story is None else str(story),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid wall data for {wall_id}: {e}") from e


def parse_walls(data: Dict[str, Any]) -> List[WallSegment]:
    """Parse the decoded JSON document into walls.

    Raises:
        ValueError: If the document or any wall record is malformed.
    """
    if not isinstance(data, dict) or "walls" not in data:
        raise ValueError("Wall data must be a JSON object with a 'walls' entry")

    raw = data["walls"]
    walls = []
    if isinstance(raw, dict):
        for wall_id, wall_data in raw.items():
            walls.append(parse_wall(wall_id, wall_data))
    elif isinstance(raw, list):
        seen = set()
        for index, wall_data in enumerate(raw):
            if not isinstance(wall_data, dict) or "id" not in wall_data:
                raise ValueError(f"Wall record {index} has no 'id'")
            wall_id = str(wall_data["id"])
            if wall_id in seen:
                raise ValueError(f"Duplicate wall id: {wall_id}")
            seen.add(wall_id)
            walls.append(parse_wall(wall_id, wall_data))
    else:
        raise ValueError(f"'walls' must be a list or an object, got: {type(raw).__name__}")

    return walls


def load_walls(path: str) -> List[WallSegment]:
    """Load walls from a JSON file.

    Args:
        path: Path to the JSON file containing wall data.

    Returns:
        Walls in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    return parse_walls(data)


def rooms_to_dict(rooms: Iterable[Room], extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Convert rooms to the JSON output document."""
    out: Dict[str, Any] = {"rooms": [room.to_dict() for room in rooms]}
    if extra:
        out.update(extra)
    return out


def save_rooms(rooms: Iterable[Room], output_path: str, extra: Optional[Dict[str, Any]] = None) -> None:
    """Save detected rooms to a JSON file.

    Args:
        rooms: Rooms to save.
        output_path: Path where to save the JSON file.
        extra: Additional top-level entries (e.g. diagnostics).
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(rooms_to_dict(rooms, extra), f, indent=2)
