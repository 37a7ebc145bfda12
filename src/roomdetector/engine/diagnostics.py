"""Typed diagnostics for faces and walls that did not become rooms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from ..core.model import Room

DiagnosticKind = Literal[
    "malformed_wall",
    "dead_end",
    "safety_aborted",
    "snap_limit_reached",
    "rejected_orientation",
    "rejected_too_small",
    "rejected_too_large",
    "rejected_not_simple",
    "duplicate_face",
]

MALFORMED_WALL: DiagnosticKind = "malformed_wall"
DEAD_END: DiagnosticKind = "dead_end"
SAFETY_ABORTED: DiagnosticKind = "safety_aborted"
SNAP_LIMIT_REACHED: DiagnosticKind = "snap_limit_reached"
REJECTED_ORIENTATION: DiagnosticKind = "rejected_orientation"
REJECTED_TOO_SMALL: DiagnosticKind = "rejected_too_small"
REJECTED_TOO_LARGE: DiagnosticKind = "rejected_too_large"
REJECTED_NOT_SIMPLE: DiagnosticKind = "rejected_not_simple"
DUPLICATE_FACE: DiagnosticKind = "duplicate_face"


@dataclass(frozen=True)
class Diagnostic:
    """Something the detector skipped.

    Attributes:
        kind: What went wrong.
        message: Human-readable description.
        subject: ID of the wall, node or candidate room concerned, if any.
        area: Signed area of the rejected face, for filter rejections.
        story_id: Story the diagnostic was found on, for per-story detection.
    """

    kind: DiagnosticKind
    message: str
    subject: Optional[str] = None
    area: Optional[float] = None
    story_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "subject": self.subject,
            "area": self.area,
            "story_id": self.story_id,
        }


@dataclass(frozen=True)
class DetectionReport:
    """Rooms found by a detection run together with everything skipped."""

    rooms: tuple[Room, ...]
    diagnostics: tuple[Diagnostic, ...] = ()

    def by_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rooms": [r.to_dict() for r in self.rooms],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
