from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .colors import NEUTRAL_COLOR, SegmentColors, get_segment_colors
from .commands import SelectIndex
from .model import Segment
from .segments import aggregate_duration, segment_at_cursor
from .timefmt import format_duration, format_timecode

HEADER_OVERLAPPING = "Make sure you have no overlapping segments."
HEADER_EMPTY = "No segments to export."
HEADER_DEFAULT = "Segments to export:"


@dataclass(frozen=True)
class SegmentItemView:
    id: str
    index: int
    ordinal: int
    time_text: str
    name: str
    duration_ms: float
    duration_text: str
    detail_text: str
    frame_count: Optional[int]
    is_active: bool
    show_nudges: bool
    can_move_up: bool
    can_move_down: bool
    is_gap: bool
    colors: SegmentColors


@dataclass(frozen=True)
class FooterView:
    can_remove: bool
    remove_title: str
    remove_color: str
    current_color: str
    can_split: bool
    split_color: str
    total_sec: float
    total_text: str


@dataclass(frozen=True)
class SegmentListView:
    header: str
    items: List[SegmentItemView]
    footer: Optional[FooterView]
    invert: bool
    current_index: Optional[int]
    count: int
    cursor_sec: Optional[float] = None
    current_name: str = ""


def header_text(display_list: Optional[Sequence[Segment]], invert: bool) -> str:
    if not display_list and invert:
        return HEADER_OVERLAPPING
    if not display_list:
        return HEADER_EMPTY
    return HEADER_DEFAULT


def activate_item(index: int, invert: bool) -> Optional[SelectIndex]:
    """Command for a click on an item; None in invert mode where items are gaps."""
    if invert:
        return None
    return SelectIndex(index=int(index))


def build_item_view(
    segment: Segment,
    index: int,
    current_index: Optional[int],
    invert: bool,
    count: int,
    format_timecode: Callable[[float], str] = format_timecode,
    format_duration: Callable[[float], str] = format_duration,
    get_frame_count: Optional[Callable[[float], Optional[int]]] = None,
    get_colors: Callable[[Optional[Segment]], SegmentColors] = get_segment_colors,
) -> SegmentItemView:
    duration = segment.dur
    duration_ms = duration * 1000
    frames = get_frame_count(duration) if get_frame_count else None
    is_active = (not invert) and current_index == index

    detail = f"({math.floor(duration_ms)} ms"
    detail += f", {frames} frames)" if frames is not None else ")"

    return SegmentItemView(
        id=segment.id,
        index=index,
        ordinal=index + 1,
        time_text=f"{format_timecode(segment.start)} - {format_timecode(segment.end)}",
        name=segment.name,
        duration_ms=duration_ms,
        duration_text=format_duration(duration_ms),
        detail_text=detail,
        frame_count=frames,
        is_active=is_active,
        show_nudges=is_active,
        can_move_up=is_active and index > 0,
        can_move_down=is_active and index < count - 1,
        is_gap=bool(invert),
        colors=get_colors(segment),
    )


def build_footer_view(
    segments: Sequence[Segment],
    display_list: Sequence[Segment],
    current_index: Optional[int],
    cursor_sec: Optional[float],
    format_timecode: Callable[[float], str] = format_timecode,
    get_colors: Callable[[Optional[Segment]], SegmentColors] = get_segment_colors,
) -> FooterView:
    current = segments[current_index] if current_index is not None and 0 <= current_index < len(segments) else None
    current_color = get_colors(current).active_bg_color
    can_remove = len(segments) >= 2
    can_split = (
        current is not None
        and cursor_sec is not None
        and segment_at_cursor(segments, cursor_sec, prefer=current_index) == current_index
    )
    total = aggregate_duration(display_list)
    ordinal = "" if current_index is None else f" {current_index + 1}"
    return FooterView(
        can_remove=can_remove,
        remove_title=f"Delete current segment{ordinal}",
        remove_color=current_color if can_remove else NEUTRAL_COLOR,
        current_color=current_color,
        can_split=can_split,
        split_color=current_color if can_split else NEUTRAL_COLOR,
        total_sec=total,
        total_text=format_timecode(total),
    )


def build_list_view(
    segments: Sequence[Segment],
    display_list: Optional[Sequence[Segment]],
    current_index: Optional[int],
    invert: bool,
    cursor_sec: Optional[float] = None,
    fps: Optional[float] = None,
    format_timecode: Callable[[float], str] = format_timecode,
    format_duration: Callable[[float], str] = format_duration,
    get_frame_count: Optional[Callable[[float, Optional[float]], Optional[int]]] = None,
    get_colors: Callable[[Optional[Segment]], SegmentColors] = get_segment_colors,
) -> SegmentListView:
    """
    View model for one render pass.

    `segments` is the canonical list (footer state), `display_list` what is
    shown (the same list, or the gaps in invert mode). Nothing here is kept
    between renders.
    """
    current = segments[current_index] if current_index is not None and 0 <= current_index < len(segments) else None
    frame_counter = None
    if get_frame_count is not None:
        frame_counter = lambda dur: get_frame_count(dur, fps)  # noqa: E731

    items: List[SegmentItemView] = []
    if display_list:
        n = len(display_list)
        for i, seg in enumerate(display_list):
            items.append(
                build_item_view(
                    seg,
                    i,
                    current_index,
                    invert,
                    n,
                    format_timecode=format_timecode,
                    format_duration=format_duration,
                    get_frame_count=frame_counter,
                    get_colors=get_colors,
                )
            )

    footer = None
    if display_list is not None:
        footer = build_footer_view(
            segments,
            display_list,
            current_index,
            cursor_sec,
            format_timecode=format_timecode,
            get_colors=get_colors,
        )

    return SegmentListView(
        header=header_text(display_list, invert),
        items=items,
        footer=footer,
        invert=bool(invert),
        current_index=current_index,
        count=len(segments),
        cursor_sec=cursor_sec,
        current_name=current.name if current is not None else "",
    )
