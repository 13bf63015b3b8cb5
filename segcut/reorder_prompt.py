from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .commands import Label, Reorder

MSG_INVALID_NUMBER = "Invalid number entered"
MAX_LABEL_LEN = 100


class ValidationError(ValueError):
    """User input rejected by a prompt; the message is meant for inline display."""
    pass


@dataclass(frozen=True)
class ReorderDraft:
    """
    Suspended reorder prompt.

    Captures the position being moved and the list length at the time the
    prompt opened; the list itself is not held.
    """

    current_index: int
    count: int

    @property
    def title(self) -> str:
        return f"Change order of segment {self.current_index + 1}"

    @property
    def text(self) -> str:
        return f"Please enter a number from 1 to {self.count} to be the new order for the current segment"

    @property
    def default_value(self) -> str:
        return str(self.current_index + 1)


def begin_reorder_prompt(current_index: Optional[int], count: int) -> Optional[ReorderDraft]:
    """Start a reorder prompt; None when there is nothing to reorder."""
    if count < 2 or current_index is None:
        return None
    if not 0 <= current_index < count:
        return None
    return ReorderDraft(current_index=int(current_index), count=int(count))


def _parse_position(raw: object) -> Optional[int]:
    s = str(raw if raw is not None else "").strip()
    # Plain ASCII digits only; int() also takes "+2", "1_0" and non-Latin numerals.
    if not (s.isascii() and s.isdigit()):
        return None
    return int(s)


def validate_order_input(raw: object, count: int) -> Optional[str]:
    """
    Validate a 1-based position typed by the user.

    Returns an error message, or None when `raw` is an integer in `[1, count]`.
    """
    v = _parse_position(raw)
    if v is None or v < 1 or v > count:
        return MSG_INVALID_NUMBER
    return None


def commit_reorder(draft: ReorderDraft, raw: object) -> Reorder:
    """Turn confirmed prompt input into a Reorder command (0-based target)."""
    err = validate_order_input(raw, draft.count)
    if err:
        raise ValidationError(err)
    return Reorder(from_index=draft.current_index, to_index=_parse_position(raw) - 1)


def validate_label_input(raw: object) -> Optional[str]:
    if len(str(raw or "")) > MAX_LABEL_LEN:
        return f"Max length {MAX_LABEL_LEN}"
    return None


def commit_label(index: int, raw: object) -> Label:
    err = validate_label_input(raw)
    if err:
        raise ValidationError(err)
    return Label(index=int(index), name=str(raw or ""))
