from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional
import uuid


def new_id() -> str:
    """Generate a stable unique id for a segment."""
    return uuid.uuid4().hex


class InvariantViolation(RuntimeError):
    """Raised when a segment list breaks its ordering/identity rules (programming error)."""
    pass


@dataclass(frozen=True)
class Segment:
    """
    Time range `[start, end)` on the media timeline that will be exported.

    Attributes:
        id: stable identity, survives reorders (position is never stored)
        start/end: seconds within the media file
        name: optional user label
    """

    id: str
    start: float
    end: float
    name: str = ""

    @property
    def dur(self) -> float:
        return max(0.0, self.end - self.start)

    def contains(self, sec: float) -> bool:
        """True when `sec` lies strictly inside the segment (edges excluded)."""
        return self.start < float(sec) < self.end


def check_segments(segments: Iterable[Segment]) -> None:
    """Raise InvariantViolation on duplicate ids or empty/negative intervals."""
    seen = set()
    for i, s in enumerate(segments):
        if s.id in seen:
            raise InvariantViolation(f"duplicate segment id {s.id!r} at index {i}")
        seen.add(s.id)
        if s.start < 0:
            raise InvariantViolation(f"segment {s.id!r} starts before 0 ({s.start})")
        if not s.end > s.start:
            raise InvariantViolation(f"segment {s.id!r} is empty ({s.start} - {s.end})")


def clamp_index(index: Optional[int], count: int) -> Optional[int]:
    """Keep a selection index inside `[0, count-1]`; None when there is nothing to select."""
    if count <= 0:
        return None
    if index is None:
        return 0
    return max(0, min(count - 1, int(index)))
