from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .model import Segment, new_id

MSG_ADDED = "Segment added"
MSG_REMOVED = "Segment removed"
MSG_MOVED = "Segment moved"
MSG_SPLIT = "Segment split"
MSG_LABELED = "Segment labeled"
MSG_NO_CHANGE = "No changes"
MSG_INVALID_INDEX = "Invalid index"
MSG_INVALID_RANGE = "Segment end must be after start"
MSG_LAST_SEGMENT = "Cannot remove the last segment"
MSG_NOTHING_TO_SPLIT = "Nothing to split: move the cursor inside the current segment"


@dataclass(frozen=True)
class EditResult:
    """
    Outcome of a list operation.

    `changed=False` means the request was rejected (or was a no-op) and
    `segments` is the input list unchanged.
    """

    segments: List[Segment]
    current_index: Optional[int]
    message: str
    changed: bool = True


def _rejected(segments: Sequence[Segment], current_index: Optional[int], msg: str) -> EditResult:
    return EditResult(segments=list(segments), current_index=current_index, message=msg, changed=False)


def _valid_index(index: object, count: int) -> bool:
    # bool is an int subclass; True/False are not positions.
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < count


def reorder(segments: Sequence[Segment], from_index: int, to_index: int) -> EditResult:
    """
    Move the segment at `from_index` so it ends up at `to_index`.

    All other segments keep their relative order and the moved segment becomes
    current. Out-of-range or non-integer indices are rejected, never clamped.
    """
    n = len(segments)
    if not _valid_index(from_index, n) or not _valid_index(to_index, n):
        return _rejected(segments, from_index if _valid_index(from_index, n) else None, MSG_INVALID_INDEX)
    if from_index == to_index:
        return _rejected(segments, from_index, MSG_NO_CHANGE)

    rest = [s for i, s in enumerate(segments) if i != from_index]
    rest.insert(to_index, segments[from_index])
    return EditResult(segments=rest, current_index=to_index, message=MSG_MOVED)


def nudge(segments: Sequence[Segment], current_index: int, delta: int) -> EditResult:
    """Move the current segment one step up (-1) or down (+1)."""
    return reorder(segments, current_index, int(current_index) + int(delta))


def add_segment(segments: Sequence[Segment], start: float, end: float, name: str = "") -> EditResult:
    """Append a new segment; the new one becomes current."""
    start = float(start)
    end = float(end)
    if start < 0 or end <= start:
        return _rejected(segments, None, MSG_INVALID_RANGE)

    existing = {s.id for s in segments}
    sid = new_id()
    while sid in existing:
        sid = new_id()
    out = [*segments, Segment(id=sid, start=start, end=end, name=str(name or ""))]
    return EditResult(segments=out, current_index=len(out) - 1, message=MSG_ADDED)


def new_segment_bounds(cursor_sec: float, media_duration: float, length_sec: float) -> Optional[Tuple[float, float]]:
    """Bounds for a segment added at the cursor; None when the cursor is at the very end."""
    total = max(0.0, float(media_duration))
    start = max(0.0, min(float(cursor_sec), total))
    end = min(total, start + max(0.0, float(length_sec)))
    if end <= start:
        return None
    return start, end


def remove_segment(segments: Sequence[Segment], index: int) -> EditResult:
    """
    Remove the segment at `index`.

    The list never becomes empty through this operation. The previous segment
    becomes current (or the first one when removing index 0).
    """
    n = len(segments)
    if n < 2:
        return _rejected(segments, 0 if n else None, MSG_LAST_SEGMENT)
    if not _valid_index(index, n):
        return _rejected(segments, None, MSG_INVALID_INDEX)

    out = [s for i, s in enumerate(segments) if i != index]
    return EditResult(segments=out, current_index=max(0, index - 1), message=MSG_REMOVED)


def segment_at_cursor(segments: Sequence[Segment], cursor_sec: float, prefer: Optional[int] = None) -> Optional[int]:
    """
    Index of the segment strictly containing `cursor_sec`.

    Overlapping segments can both contain the cursor; `prefer` wins when it is
    one of them, otherwise the first match does.
    """
    if prefer is not None and 0 <= prefer < len(segments) and segments[prefer].contains(cursor_sec):
        return prefer
    for i, s in enumerate(segments):
        if s.contains(cursor_sec):
            return i
    return None


def split_segment_at_cursor(
    segments: Sequence[Segment],
    current_index: int,
    cursor_sec: float,
    min_piece_sec: float = 0.0,
) -> EditResult:
    """
    Split the current segment into two at an absolute cursor time.

    Args:
        segments: current segment list
        current_index: segment to split
        cursor_sec: absolute media time; must be strictly inside the segment
        min_piece_sec: guard to avoid ultra-short pieces

    Both halves keep the original name and get fresh ids. The left half
    becomes current.
    """
    n = len(segments)
    if not _valid_index(current_index, n):
        return _rejected(segments, None, MSG_INVALID_INDEX)

    seg = segments[current_index]
    t = float(cursor_sec)
    guard = max(0.0, float(min_piece_sec))
    if t <= seg.start + guard or t >= seg.end - guard:
        return _rejected(segments, current_index, MSG_NOTHING_TO_SPLIT)

    taken = {s.id for s in segments}
    left_id = new_id()
    while left_id in taken:
        left_id = new_id()
    taken.add(left_id)
    right_id = new_id()
    while right_id in taken:
        right_id = new_id()

    left = replace(seg, id=left_id, end=t)
    right = replace(seg, id=right_id, start=t)
    out = [*segments[:current_index], left, right, *segments[current_index + 1 :]]
    return EditResult(segments=out, current_index=current_index, message=MSG_SPLIT)


def label_segment(segment: Segment, name: str) -> Segment:
    """Rename a segment. Empty string is a valid name."""
    name = str(name or "")
    if segment.name == name:
        return segment
    return replace(segment, name=name)


def label_at(segments: Sequence[Segment], index: int, name: str) -> EditResult:
    n = len(segments)
    if not _valid_index(index, n):
        return _rejected(segments, None, MSG_INVALID_INDEX)

    seg = segments[index]
    renamed = label_segment(seg, name)
    if renamed is seg:
        return _rejected(segments, index, MSG_NO_CHANGE)
    out = list(segments)
    out[index] = renamed
    return EditResult(segments=out, current_index=index, message=MSG_LABELED)


def aggregate_duration(segments: Optional[Sequence[Segment]]) -> float:
    if not segments:
        return 0.0
    return sum(s.dur for s in segments)


def invert_segments(segments: Sequence[Segment], media_duration: float) -> Optional[List[Segment]]:
    """
    Complement of `segments` over `[0, media_duration]`.

    Returns None when any two segments overlap, since the gaps are undefined then.
    Gap ids are derived from the neighbouring segment ids so they are stable
    between renders.
    """
    ordered = sorted(segments, key=lambda s: (s.start, s.end))
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.start < prev.end:
            return None

    total = max(0.0, float(media_duration))
    gaps: List[Segment] = []
    cursor = 0.0
    prev_id = "start"
    for s in ordered:
        if s.start > cursor:
            gaps.append(Segment(id=f"gap:{prev_id}:{s.id}", start=cursor, end=s.start))
        cursor = max(cursor, s.end)
        prev_id = s.id
    if total > cursor:
        gaps.append(Segment(id=f"gap:{prev_id}:end", start=cursor, end=total))
    return gaps


def compute_display_list(
    segments: Sequence[Segment],
    invert: bool,
    media_duration: float,
) -> Optional[List[Segment]]:
    """Segments actually shown: the list itself, or its gaps in invert mode."""
    if not invert:
        return list(segments)
    return invert_segments(segments, media_duration)
