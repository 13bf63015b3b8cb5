from __future__ import annotations

import logging
from typing import Callable, Optional

import flet as ft

from .colors import NEUTRAL_COLOR, SAVE_COLOR
from .commands import Command, RemoveSegment, Reorder, Split
from .reorder_prompt import ValidationError, begin_reorder_prompt, commit_label, commit_reorder
from .view import SegmentItemView, SegmentListView, activate_item

log = logging.getLogger("segcut")


class SegmentListPanel:
    """
    Sidebar listing the segments to export, with the segment toolbar below.

    The panel keeps no list state between renders: `build(view)` renders one
    SegmentListView and every user action is sent to the host via `dispatch`.
    """

    def __init__(
        self,
        page: ft.Page,
        dispatch: Callable[[Command], None],
        on_add: Callable[[], None],
        on_close: Optional[Callable[[], None]] = None,
        on_typing_focus: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self.page = page
        self.dispatch = dispatch
        self.on_add = on_add
        self.on_close = on_close
        self.on_typing_focus = on_typing_focus

    # ---------- items ----------
    def _badge(self, item: SegmentItemView) -> ft.Control:
        if item.is_gap:
            return ft.Icon(ft.Icons.SAVE, color=SAVE_COLOR, size=14)
        return ft.Container(
            padding=ft.padding.symmetric(horizontal=4),
            border_radius=10,
            bgcolor=item.colors.bg_color,
            border=ft.Border.all(1, item.colors.border_color if item.is_active else ft.Colors.TRANSPARENT),
            content=ft.Text(str(item.ordinal), size=12, weight=ft.FontWeight.BOLD, color=ft.Colors.WHITE),
        )

    def _item(self, view: SegmentListView, item: SegmentItemView) -> ft.Control:
        def _on_click(_e=None) -> None:
            cmd = activate_item(item.index, view.invert)
            if cmd is not None:
                self.dispatch(cmd)

        def _nudge(delta: int):
            def _handler(_e=None) -> None:
                self.dispatch(Reorder(from_index=item.index, to_index=item.index + delta))

            return _handler

        body = ft.Column(
            [
                ft.Row([self._badge(item), ft.Text(item.time_text, size=13, no_wrap=True)], spacing=5),
                ft.Text(item.name, size=12, color=ft.Colors.WHITE),
                ft.Text(f"Duration {item.duration_text}", size=13),
                ft.Text(item.detail_text, size=12, color=ft.Colors.WHITE70),
            ],
            spacing=2,
            tight=True,
        )

        row_controls = [ft.Container(content=body, expand=True)]
        if item.show_nudges:
            row_controls.append(
                ft.Column(
                    [
                        ft.IconButton(
                            ft.Icons.ARROW_CIRCLE_UP,
                            icon_size=20,
                            tooltip="Move up",
                            disabled=not item.can_move_up,
                            on_click=_nudge(-1),
                        ),
                        ft.IconButton(
                            ft.Icons.ARROW_CIRCLE_DOWN,
                            icon_size=20,
                            tooltip="Move down",
                            disabled=not item.can_move_down,
                            on_click=_nudge(1),
                        ),
                    ],
                    spacing=0,
                    tight=True,
                )
            )

        return ft.Container(
            key=item.id,
            padding=5,
            margin=ft.margin.symmetric(vertical=5),
            border_radius=5,
            border=ft.Border.all(1, ft.Colors.WHITE if item.is_active else ft.Colors.WHITE30),
            on_click=None if view.invert else _on_click,
            content=ft.Row(row_controls, vertical_alignment=ft.CrossAxisAlignment.END),
        )

    # ---------- footer ----------
    def _footer(self, view: SegmentListView) -> ft.Control:
        f = view.footer
        assert f is not None

        def _remove(_e=None) -> None:
            if view.current_index is None:
                return
            self.dispatch(RemoveSegment(index=view.current_index))

        def _split(_e=None) -> None:
            if view.current_index is None or view.cursor_sec is None:
                return
            self.dispatch(Split(index=view.current_index, cursor_sec=view.cursor_sec))

        toolbar = ft.Row(
            [
                ft.IconButton(
                    ft.Icons.ADD,
                    icon_size=30,
                    tooltip="Add segment",
                    bgcolor=NEUTRAL_COLOR,
                    on_click=lambda _e: self.on_add(),
                ),
                ft.IconButton(
                    ft.Icons.REMOVE,
                    icon_size=30,
                    tooltip=f.remove_title,
                    bgcolor=f.remove_color,
                    on_click=_remove,
                ),
                ft.IconButton(
                    ft.Icons.FORMAT_LIST_NUMBERED,
                    icon_size=20,
                    tooltip="Change segment order",
                    bgcolor=f.current_color,
                    on_click=lambda _e: self.show_reorder_prompt(view),
                ),
                ft.IconButton(
                    ft.Icons.LABEL,
                    icon_size=20,
                    tooltip="Label segment",
                    bgcolor=f.current_color,
                    on_click=lambda _e: self.show_label_prompt(view),
                ),
                ft.IconButton(
                    ft.Icons.CALL_SPLIT,
                    icon_size=20,
                    tooltip="Split segment at cursor",
                    bgcolor=f.split_color,
                    on_click=_split,
                ),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            spacing=3,
        )
        total_row = ft.Row(
            [ft.Text("Segments total:", size=13), ft.Text(f.total_text, size=13)],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )
        return ft.Column(
            [
                ft.Container(content=toolbar, padding=ft.padding.symmetric(vertical=5)),
                ft.Divider(height=1, color=ft.Colors.GREY),
                ft.Container(content=total_row, padding=10),
                ft.Divider(height=1, color=ft.Colors.GREY),
            ],
            spacing=0,
            tight=True,
        )

    def build(self, view: SegmentListView) -> ft.Control:
        header_controls = []
        if self.on_close is not None:
            header_controls.append(
                ft.IconButton(ft.Icons.CHEVRON_RIGHT, icon_size=18, tooltip="Close sidebar", on_click=lambda _e: self.on_close())
            )
        header_controls.append(ft.Text(view.header, size=14))

        items = ft.ListView(
            [self._item(view, it) for it in view.items],
            expand=True,
            spacing=0,
            padding=ft.padding.symmetric(horizontal=10),
        )
        controls = [ft.Row(header_controls, spacing=4), items]
        if view.footer is not None:
            controls.append(self._footer(view))
        return ft.Column(controls, expand=True, spacing=4)

    # ---------- prompts ----------
    def _text_focus(self, on: bool) -> None:
        if self.on_typing_focus is not None:
            self.on_typing_focus(on)

    def show_reorder_prompt(self, view: SegmentListView) -> None:
        draft = begin_reorder_prompt(view.current_index, view.count)
        if draft is None:
            return

        field = ft.TextField(
            value=draft.default_value,
            autofocus=True,
            dense=True,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_focus=lambda _e: self._text_focus(True),
            on_blur=lambda _e: self._text_focus(False),
        )

        def _close() -> None:
            self._text_focus(False)
            self.page.pop_dialog()

        def _on_ok(_e=None) -> None:
            try:
                cmd = commit_reorder(draft, field.value)
            except ValidationError as ex:
                log.debug("reorder input rejected: %s", ex)
                field.error_text = str(ex)
                field.update()
                return
            _close()
            self.dispatch(cmd)

        field.on_submit = _on_ok
        dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text(draft.title),
            content=ft.Column([ft.Text(draft.text, size=13), field], tight=True, spacing=8, width=360),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _e: _close()),
                ft.FilledButton("OK", on_click=_on_ok),
            ],
        )
        self.page.show_dialog(dlg)

    def show_label_prompt(self, view: SegmentListView) -> None:
        idx = view.current_index
        if idx is None or not 0 <= idx < view.count:
            return
        field = ft.TextField(
            value=view.current_name,
            label="Label",
            autofocus=True,
            dense=True,
            on_focus=lambda _e: self._text_focus(True),
            on_blur=lambda _e: self._text_focus(False),
        )

        def _close() -> None:
            self._text_focus(False)
            self.page.pop_dialog()

        def _on_ok(_e=None) -> None:
            try:
                cmd = commit_label(idx, field.value)
            except ValidationError as ex:
                log.debug("label input rejected: %s", ex)
                field.error_text = str(ex)
                field.update()
                return
            _close()
            self.dispatch(cmd)

        field.on_submit = _on_ok
        dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text(f"Label segment {idx + 1}"),
            content=ft.Container(width=360, content=field),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _e: _close()),
                ft.FilledButton("OK", on_click=_on_ok),
            ],
        )
        self.page.show_dialog(dlg)
