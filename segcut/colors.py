from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional

from .model import Segment

NEUTRAL_COLOR = "#33FFFFFF"  # white @ 20%
SAVE_COLOR = "#FF5FD38D"

# (r, g, b) palette; a segment keeps its slot for as long as it keeps its id.
_PALETTE = [
    (222, 77, 80),
    (231, 145, 54),
    (217, 196, 58),
    (104, 190, 79),
    (59, 170, 160),
    (66, 133, 214),
    (128, 95, 214),
    (205, 84, 168),
]


@dataclass(frozen=True)
class SegmentColors:
    bg_color: str
    border_color: str
    active_bg_color: str


def _argb(rgb, alpha: float) -> str:
    a = max(0, min(255, int(round(alpha * 255))))
    r, g, b = rgb
    return f"#{a:02X}{r:02X}{g:02X}{b:02X}"


def palette_slot(segment_id: str) -> int:
    digest = hashlib.sha1(str(segment_id).encode("utf-8", errors="ignore")).hexdigest()
    return int(digest[:8], 16) % len(_PALETTE)


def get_segment_colors(segment: Optional[Segment]) -> SegmentColors:
    """Colors for a segment badge/button; neutral when there is no segment."""
    if segment is None:
        return SegmentColors(bg_color=NEUTRAL_COLOR, border_color=NEUTRAL_COLOR, active_bg_color=NEUTRAL_COLOR)
    rgb = _PALETTE[palette_slot(segment.id)]
    return SegmentColors(
        bg_color=_argb(rgb, 0.5),
        border_color=_argb(rgb, 1.0),
        active_bg_color=_argb(rgb, 0.7),
    )
