from __future__ import annotations

from typing import List, Optional, Tuple


# Shortcut action ids used by app.py dispatcher.
ACTION_ADD = "add"
ACTION_REMOVE = "remove"
ACTION_SPLIT = "split"
ACTION_LABEL = "label"
ACTION_REORDER = "reorder"
ACTION_TOGGLE_INVERT = "toggle_invert"
ACTION_SELECT_PREV = "select_prev"
ACTION_SELECT_NEXT = "select_next"
ACTION_MOVE_UP = "move_up"
ACTION_MOVE_DOWN = "move_down"
ACTION_UNDO = "undo"
ACTION_REDO = "redo"
ACTION_SHOW_SHORTCUTS = "show_shortcuts"


def _normalize_key(key: str) -> str:
    raw = str(key or "")
    if raw == " ":
        return "space"
    k = raw.strip().lower().replace(" ", "")
    aliases = {
        "arrowleft": "left",
        "arrowright": "right",
        "arrowup": "up",
        "arrowdown": "down",
        "spacebar": "space",
        "add": "+",
        "subtract": "-",
    }
    return aliases.get(k, k)


def resolve_shortcut_action(
    *,
    key: str,
    ctrl: bool = False,
    shift: bool = False,
    alt: bool = False,
    meta: bool = False,
    typing_focus: bool = False,
) -> Optional[str]:
    """
    Resolve a keyboard event into a segment list action.

    `typing_focus=True` blocks plain editing/navigation shortcuts so users can
    type a label or position without accidentally editing the list.
    """
    k = _normalize_key(key)
    if not k:
        return None

    # Always-available help shortcut.
    if k == "f1" or k == "?" or (k == "/" and bool(shift)):
        return ACTION_SHOW_SHORTCUTS

    if bool(alt):
        return None

    primary_mod = bool(ctrl or meta)
    if primary_mod and (not shift) and k == "z":
        return ACTION_UNDO
    if primary_mod and (k == "y" or (shift and k == "z")):
        return ACTION_REDO
    if primary_mod and k == "up":
        return ACTION_MOVE_UP
    if primary_mod and k == "down":
        return ACTION_MOVE_DOWN
    if primary_mod:
        return None

    if typing_focus:
        return None

    if k in ("+", "="):
        return ACTION_ADD
    if k in ("delete", "backspace"):
        return ACTION_REMOVE
    if k == "s":
        return ACTION_SPLIT
    if k == "l":
        return ACTION_LABEL
    if k == "o":
        return ACTION_REORDER
    if k == "i":
        return ACTION_TOGGLE_INVERT
    if k == "up":
        return ACTION_SELECT_PREV
    if k == "down":
        return ACTION_SELECT_NEXT
    return None


def shortcut_legend() -> List[Tuple[str, str]]:
    """Human-readable shortcuts list for the in-app help dialog."""
    return [
        ("+", "Add segment"),
        ("Delete / Backspace", "Delete current segment"),
        ("S", "Split current segment at cursor"),
        ("L", "Label current segment"),
        ("O", "Change segment order"),
        ("I", "Toggle export of gaps (invert)"),
        ("Up / Down", "Select previous/next segment"),
        ("Ctrl/Cmd + Up / Down", "Move current segment up/down"),
        ("Ctrl/Cmd + Z", "Undo"),
        ("Ctrl/Cmd + Y", "Redo"),
        ("Ctrl/Cmd + Shift + Z", "Redo"),
        ("F1 or ?", "Show shortcuts help"),
    ]
