from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from .commands import SegmentListState


@dataclass(frozen=True)
class HistoryEntry:
    """
    One undo/redo step: the list state before (or after) a labelled edit.

    SegmentListState and Segment are frozen, so the snapshot is the state
    object itself.
    """

    label: str
    state: SegmentListState


class HistoryManager:
    """
    Undo/redo stacks of list snapshots.

    The undo side is bounded; the oldest step falls off once `limit` is
    reached. Any new edit empties the redo side.
    """

    def __init__(self, limit: int = 50) -> None:
        self._undo: Deque[HistoryEntry] = deque(maxlen=max(1, int(limit)))
        self._redo: List[HistoryEntry] = []

    @property
    def limit(self) -> int:
        return self._undo.maxlen

    def can_undo(self) -> bool:
        return len(self._undo) > 0

    def can_redo(self) -> bool:
        return len(self._redo) > 0

    def peek_undo_label(self) -> str:
        return self._undo[-1].label if self._undo else ""

    def peek_redo_label(self) -> str:
        return self._redo[-1].label if self._redo else ""

    def record(self, label: str, before: SegmentListState) -> None:
        """Remember `before` as the state to return to when `label` is undone."""
        self._undo.append(HistoryEntry(label, before))
        self._redo = []

    def undo(self, current: SegmentListState) -> Optional[HistoryEntry]:
        if not self._undo:
            return None
        entry = self._undo.pop()
        self._redo.append(HistoryEntry(entry.label, current))
        return entry

    def redo(self, current: SegmentListState) -> Optional[HistoryEntry]:
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._undo.append(HistoryEntry(entry.label, current))
        return entry
