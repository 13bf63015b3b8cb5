from __future__ import annotations

import logging
from dataclasses import replace

import flet as ft

from segcut.commands import (
    AddSegment,
    Command,
    Label,
    RemoveSegment,
    Reorder,
    SegmentListState,
    SelectIndex,
    SetInvert,
    Split,
    apply_command,
)
from segcut.config import ConfigStore
from segcut.history import HistoryEntry, HistoryManager
from segcut.model import Segment, new_id
from segcut.segments import compute_display_list, new_segment_bounds
from segcut.shortcuts import (
    ACTION_ADD,
    ACTION_LABEL,
    ACTION_MOVE_DOWN,
    ACTION_MOVE_UP,
    ACTION_REDO,
    ACTION_REMOVE,
    ACTION_REORDER,
    ACTION_SELECT_NEXT,
    ACTION_SELECT_PREV,
    ACTION_SHOW_SHORTCUTS,
    ACTION_SPLIT,
    ACTION_TOGGLE_INVERT,
    ACTION_UNDO,
    resolve_shortcut_action,
    shortcut_legend,
)
from segcut.timefmt import format_timecode, get_frame_count
from segcut.view import build_list_view
from segcut.widget import SegmentListPanel

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("segcut")

_HISTORY_LABELS = {
    AddSegment: "Add segment",
    RemoveSegment: "Remove segment",
    Reorder: "Change segment order",
    Split: "Split segment",
    Label: "Label segment",
}


def main(page: ft.Page) -> None:
    page.title = "SegCut"
    page.theme_mode = ft.ThemeMode.DARK
    page.padding = 10

    cfg = ConfigStore.default()
    fps = cfg.fps()
    media_duration = cfg.media_duration_sec()
    history = HistoryManager(limit=cfg.history_limit())
    state = SegmentListState.create(
        [Segment(id=new_id(), start=0.0, end=media_duration)],
        current_index=0,
        invert=cfg.invert_default(),
    )
    cursor_sec = 0.0
    typing_shortcuts_blocked = False
    sidebar_visible = True

    # ---------- helpers ----------
    def snack(msg: str) -> None:
        page.show_dialog(ft.SnackBar(ft.Text(msg)))

    def _history_apply(entry: HistoryEntry) -> None:
        nonlocal state
        # Invert mode is not part of the undo history.
        state = replace(entry.state, invert=state.invert)
        _refresh_history_controls()
        refresh()

    def dispatch(command: Command) -> None:
        nonlocal state
        label = _HISTORY_LABELS.get(type(command))
        try:
            new_state, res = apply_command(state, command)
        except Exception as ex:
            log.exception("command failed: %s", ex)
            snack(f"Error: {ex}")
            return
        if new_state is state:
            if res.message and not isinstance(command, SelectIndex):
                snack(res.message)
            return
        if label:
            history.record(label, state)
            _refresh_history_controls()
        state = new_state
        refresh()

    def add_click() -> None:
        bounds = new_segment_bounds(cursor_sec, media_duration, cfg.new_segment_sec())
        if bounds is None:
            snack("Cursor is at the end of the media")
            return
        dispatch(AddSegment(start=bounds[0], end=bounds[1]))

    def undo_click(_e=None) -> None:
        entry = history.undo(state)
        if not entry:
            return
        _history_apply(entry)
        snack(f"Undo: {entry.label}")

    def redo_click(_e=None) -> None:
        entry = history.redo(state)
        if not entry:
            return
        _history_apply(entry)
        snack(f"Redo: {entry.label}")

    undo_btn = ft.IconButton(ft.Icons.UNDO, tooltip="Undo (Ctrl/Cmd+Z)", on_click=undo_click, disabled=True)
    redo_btn = ft.IconButton(ft.Icons.REDO, tooltip="Redo (Ctrl/Cmd+Y)", on_click=redo_click, disabled=True)
    shortcuts_btn = ft.IconButton(
        ft.Icons.KEYBOARD,
        tooltip="Keyboard shortcuts (F1 / ?)",
        on_click=lambda _e: _show_shortcuts_dialog(),
    )

    def _refresh_history_controls() -> None:
        undo_btn.disabled = not history.can_undo()
        redo_btn.disabled = not history.can_redo()

        if history.can_undo():
            undo_btn.tooltip = f"Undo: {history.peek_undo_label()} (Ctrl/Cmd+Z)"
        else:
            undo_btn.tooltip = "Undo (Ctrl/Cmd+Z)"

        if history.can_redo():
            redo_btn.tooltip = f"Redo: {history.peek_redo_label()} (Ctrl/Cmd+Y)"
        else:
            redo_btn.tooltip = "Redo (Ctrl/Cmd+Y)"

    def _set_typing_focus(on: bool) -> None:
        nonlocal typing_shortcuts_blocked
        typing_shortcuts_blocked = bool(on)

    def _toggle_sidebar() -> None:
        nonlocal sidebar_visible
        sidebar_visible = not sidebar_visible
        sidebar.visible = sidebar_visible
        show_sidebar_btn.visible = not sidebar_visible
        page.update()

    panel = SegmentListPanel(
        page,
        dispatch=dispatch,
        on_add=add_click,
        on_close=_toggle_sidebar,
        on_typing_focus=_set_typing_focus,
    )

    def _current_view():
        display = compute_display_list(state.segments, state.invert, media_duration)
        return build_list_view(
            state.segments,
            display,
            state.current_index,
            state.invert,
            cursor_sec=cursor_sec,
            fps=fps,
            get_frame_count=get_frame_count,
        )

    def _select_neighbor(delta: int) -> None:
        if state.current_index is None:
            return
        new_idx = max(0, min(len(state.segments) - 1, state.current_index + int(delta)))
        if new_idx != state.current_index:
            dispatch(SelectIndex(index=new_idx))

    def _move_current(delta: int) -> None:
        if state.current_index is None or state.invert:
            return
        dispatch(Reorder(from_index=state.current_index, to_index=state.current_index + int(delta)))

    def _show_shortcuts_dialog(_e=None) -> None:
        rows = []
        for keys, desc in shortcut_legend():
            rows.append(
                ft.Row(
                    [
                        ft.Container(width=210, content=ft.Text(keys, weight=ft.FontWeight.BOLD, size=12)),
                        ft.Text(desc, size=12, color=ft.Colors.WHITE70),
                    ],
                    alignment=ft.MainAxisAlignment.START,
                    vertical_alignment=ft.CrossAxisAlignment.START,
                )
            )

        dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text("Keyboard Shortcuts"),
            content=ft.Container(
                width=560,
                height=360,
                content=ft.ListView(rows, spacing=6),
            ),
            actions=[ft.TextButton("Close", on_click=lambda _e: page.pop_dialog())],
        )
        page.show_dialog(dlg)

    def on_keyboard(e: ft.KeyboardEvent) -> None:
        action = resolve_shortcut_action(
            key=str(getattr(e, "key", "") or ""),
            ctrl=bool(getattr(e, "ctrl", False)),
            shift=bool(getattr(e, "shift", False)),
            alt=bool(getattr(e, "alt", False)),
            meta=bool(getattr(e, "meta", False)),
            typing_focus=bool(typing_shortcuts_blocked),
        )
        if not action:
            return

        if action == ACTION_UNDO:
            undo_click()
        elif action == ACTION_REDO:
            redo_click()
        elif action == ACTION_ADD:
            add_click()
        elif action == ACTION_REMOVE:
            if state.current_index is not None:
                dispatch(RemoveSegment(index=state.current_index))
        elif action == ACTION_SPLIT:
            if state.current_index is not None:
                dispatch(Split(index=state.current_index, cursor_sec=cursor_sec))
        elif action == ACTION_LABEL:
            panel.show_label_prompt(_current_view())
        elif action == ACTION_REORDER:
            panel.show_reorder_prompt(_current_view())
        elif action == ACTION_TOGGLE_INVERT:
            set_invert(not state.invert)
        elif action == ACTION_SELECT_PREV:
            _select_neighbor(-1)
        elif action == ACTION_SELECT_NEXT:
            _select_neighbor(1)
        elif action == ACTION_MOVE_UP:
            _move_current(-1)
        elif action == ACTION_MOVE_DOWN:
            _move_current(1)
        elif action == ACTION_SHOW_SHORTCUTS:
            _show_shortcuts_dialog()

    page.on_keyboard_event = on_keyboard

    # ---------- cursor / mode ----------
    cursor_label = ft.Text(format_timecode(0.0), size=12, color=ft.Colors.WHITE70)

    def on_cursor_change(e: ft.ControlEvent) -> None:
        nonlocal cursor_sec
        try:
            cursor_sec = max(0.0, min(media_duration, float(e.control.value)))
        except Exception:
            return
        cursor_label.value = format_timecode(cursor_sec)
        refresh()

    cursor_slider = ft.Slider(min=0, max=media_duration, value=0, expand=True, on_change=on_cursor_change)

    def set_invert(enabled: bool) -> None:
        dispatch(SetInvert(enabled=enabled))
        cfg.set_value("invert_default", state.invert)

    def on_invert_change(e: ft.ControlEvent) -> None:
        set_invert(bool(e.control.value))

    invert_switch = ft.Switch(label="Export gaps (invert)", value=state.invert, on_change=on_invert_change)

    sidebar = ft.Container(width=300, padding=6, border_radius=8, bgcolor=ft.Colors.GREY_900)
    show_sidebar_btn = ft.IconButton(
        ft.Icons.CHEVRON_LEFT,
        tooltip="Show segments",
        visible=False,
        on_click=lambda _e: _toggle_sidebar(),
    )

    def refresh() -> None:
        sidebar.content = panel.build(_current_view())
        invert_switch.value = state.invert
        page.update()

    page.add(
        ft.Row(
            [
                ft.Column(
                    [
                        ft.Row([undo_btn, redo_btn, shortcuts_btn, ft.Container(expand=True), invert_switch, show_sidebar_btn]),
                        ft.Container(expand=True),
                        ft.Row([ft.Text("Cursor", size=12), cursor_slider, cursor_label]),
                    ],
                    expand=True,
                ),
                sidebar,
            ],
            expand=True,
            vertical_alignment=ft.CrossAxisAlignment.STRETCH,
        )
    )
    _refresh_history_controls()
    refresh()


if __name__ == "__main__":
    ft.app(target=main)
