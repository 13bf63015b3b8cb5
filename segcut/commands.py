from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .model import Segment, check_segments, clamp_index
from .segments import (
    MSG_INVALID_INDEX,
    MSG_NO_CHANGE,
    EditResult,
    add_segment,
    label_at,
    remove_segment,
    reorder,
    split_segment_at_cursor,
)

log = logging.getLogger("segcut")


@dataclass(frozen=True)
class SelectIndex:
    index: int


@dataclass(frozen=True)
class AddSegment:
    start: float
    end: float
    name: str = ""


@dataclass(frozen=True)
class RemoveSegment:
    index: int


@dataclass(frozen=True)
class Reorder:
    from_index: int
    to_index: int


@dataclass(frozen=True)
class Split:
    index: int
    cursor_sec: float


@dataclass(frozen=True)
class Label:
    index: int
    name: str


@dataclass(frozen=True)
class SetInvert:
    enabled: bool


Command = Union[SelectIndex, AddSegment, RemoveSegment, Reorder, Split, Label, SetInvert]


@dataclass(frozen=True)
class SegmentListState:
    """
    Canonical segment list owned by the host.

    Notes:
        - `current_index` is None only when the list is empty.
        - In invert mode the selection is kept but no item is rendered as current.
    """

    segments: Tuple[Segment, ...] = ()
    current_index: Optional[int] = None
    invert: bool = False

    @staticmethod
    def create(segments=(), current_index: Optional[int] = 0, invert: bool = False) -> "SegmentListState":
        segs = tuple(segments)
        check_segments(segs)
        return SegmentListState(segments=segs, current_index=clamp_index(current_index, len(segs)), invert=bool(invert))

    @property
    def current_segment(self) -> Optional[Segment]:
        if self.current_index is None or not self.segments:
            return None
        return self.segments[self.current_index]


def _noop(state: SegmentListState, msg: str) -> Tuple[SegmentListState, EditResult]:
    return state, EditResult(segments=list(state.segments), current_index=state.current_index, message=msg, changed=False)


def apply_command(state: SegmentListState, command: Command) -> Tuple[SegmentListState, EditResult]:
    """
    Apply one command to the state.

    Rejected commands return the very same state object together with an
    EditResult whose `changed` is False.
    """
    segs = state.segments

    if isinstance(command, SetInvert):
        enabled = bool(command.enabled)
        if enabled == state.invert:
            return _noop(state, MSG_NO_CHANGE)
        log.info("invert mode %s", "on" if enabled else "off")
        new_state = replace(state, invert=enabled)
        return new_state, EditResult(segments=list(segs), current_index=state.current_index, message="Invert mode changed")

    if isinstance(command, SelectIndex):
        if state.invert:
            log.debug("select ignored in invert mode")
            return _noop(state, MSG_NO_CHANGE)
        idx = command.index
        if not isinstance(idx, int) or isinstance(idx, bool) or not (0 <= idx < len(segs)):
            log.debug("select rejected: %r", idx)
            return _noop(state, MSG_INVALID_INDEX)
        if idx == state.current_index:
            return _noop(state, MSG_NO_CHANGE)
        return replace(state, current_index=idx), EditResult(segments=list(segs), current_index=idx, message="Segment selected")

    if isinstance(command, AddSegment):
        res = add_segment(segs, command.start, command.end, command.name)
    elif isinstance(command, RemoveSegment):
        res = remove_segment(segs, command.index)
    elif isinstance(command, Reorder):
        res = reorder(segs, command.from_index, command.to_index)
    elif isinstance(command, Split):
        res = split_segment_at_cursor(segs, command.index, command.cursor_sec)
    elif isinstance(command, Label):
        res = label_at(segs, command.index, command.name)
    else:
        raise TypeError(f"unknown command: {command!r}")

    if not res.changed:
        log.debug("%s rejected: %s", type(command).__name__, res.message)
        return state, replace(res, current_index=state.current_index)

    check_segments(res.segments)
    log.info("%s: %s", type(command).__name__, res.message)
    new_state = replace(
        state,
        segments=tuple(res.segments),
        current_index=clamp_index(res.current_index, len(res.segments)),
    )
    return new_state, res
