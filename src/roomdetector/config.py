"""Tolerances and thresholds for room detection.

All distances are in meters and all areas in square meters, matching the
units of the wall coordinates drawn on the canvas.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# Global parameters for algorithm sensitivity
EPSILON = 0.001  # Parametric / on-segment tolerance
SNAP_DIST = 0.2  # Endpoint clustering and T-junction snap distance (200 mm)
NODE_MERGE_DIST = 0.05  # Fragment endpoint merge distance (5 cm)
T_JUNCTION_MARGIN = 0.05  # Projections with t outside (margin, 1 - margin) are corners
MAX_SNAP_PASSES = 3  # Fixed-point passes for T-junction snapping
MAX_WALK_STEPS = 100  # Safety cap for a single face walk
MIN_ROOM_AREA = 0.1  # Faces below this are snap noise
MAX_ROOM_AREA = 10000.0  # Faces above this are treated as the outer boundary
MIN_WALLS = 3  # Fewer effective segments cannot enclose anything
COORD_DIGITS = 6  # Rounding used only to order nodes deterministically


@dataclass(frozen=True)
class DetectionConfig:
    """Tunable parameters for a detection run.

    Attributes:
        epsilon: Tolerance for intersection parameters and points lying on segments.
        snap_dist: Distance under which wall endpoints are clustered into one node.
        node_merge_dist: Distance under which fragment endpoints become the same node.
        t_junction_margin: Parametric margin keeping T-junction snaps away from corners.
        max_snap_passes: Maximum number of T-junction snapping passes.
        max_walk_steps: Maximum half-edges followed by a single face walk.
        min_room_area: Smallest accepted room area.
        max_room_area: Largest accepted room area.
        min_walls: Minimum number of effective wall segments needed to look for rooms.
    """

    epsilon: float = EPSILON
    snap_dist: float = SNAP_DIST
    node_merge_dist: float = NODE_MERGE_DIST
    t_junction_margin: float = T_JUNCTION_MARGIN
    max_snap_passes: int = MAX_SNAP_PASSES
    max_walk_steps: int = MAX_WALK_STEPS
    min_room_area: float = MIN_ROOM_AREA
    max_room_area: float = MAX_ROOM_AREA
    min_walls: int = MIN_WALLS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DetectionConfig":
        """Build a config from a mapping, falling back to defaults for missing keys.

        Raises:
            ValueError: If a key is unknown, a value is not a positive finite
                number, or an integer field gets a fractional value.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        values = {}
        for key, raw in data.items():
            if isinstance(raw, bool):
                raise ValueError(f"Invalid value for {key}: {raw!r}")
            try:
                value = float(raw)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from e
            if not math.isfinite(value):
                raise ValueError(f"Invalid value for {key}: {raw!r}")
            if known[key].type == "int":
                if not value.is_integer():
                    raise ValueError(f"Config value {key} must be a whole number, got {raw!r}")
                value = int(value)
            if value <= 0:
                raise ValueError(f"Config value {key} must be positive, got {raw!r}")
            values[key] = value

        config = cls(**values)
        if config.t_junction_margin >= 0.5:
            raise ValueError("t_junction_margin must be below 0.5")
        if config.min_room_area >= config.max_room_area:
            raise ValueError("min_room_area must be below max_room_area")
        return config

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = DetectionConfig()


def load_config(path: str | Path) -> DetectionConfig:
    """Load a detection config from a JSON file.

    Args:
        path: Path to a JSON object whose keys are DetectionConfig fields.

    Returns:
        The parsed DetectionConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON is not an object or holds invalid values.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object, got: {type(data).__name__}")

    return DetectionConfig.from_dict(data)
