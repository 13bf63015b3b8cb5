"""Time formatting helpers for segment labels.

`format_timecode` is used for segment start/end, `format_duration` for the
compact duration line, `get_frame_count` for the frame detail.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

__all__ = ["format_timecode", "format_duration", "get_frame_count"]


def _to_ms(seconds: float) -> int:
    return int((Decimal(str(seconds)) * Decimal(1000)).to_integral_value(rounding=ROUND_HALF_UP))


def format_timecode(seconds: float) -> str:
    """Return `hh:mm:ss.mmm`; negative input clamps to zero.

    Milliseconds are rounded half-up (1.2345 -> 00:00:01.235).
    """
    seconds = max(0.0, float(seconds))
    ms_total = _to_ms(seconds)
    h, rem = divmod(ms_total, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def format_duration(ms: float) -> str:
    """Compact human-readable duration: "350ms", "1.2s", "3m 4s", "1h 2m 3s"."""
    ms = max(0.0, float(ms))
    if ms < 1000:
        return f"{int(ms)}ms"

    total_sec = ms / 1000.0
    days, rem = divmod(int(total_sec), 86400)
    hours, rem = divmod(rem, 3600)
    minutes, _ = divmod(rem, 60)
    # One decimal place, truncated so 59.99s never shows as 60s.
    secs = math.floor((total_sec - days * 86400 - hours * 3600 - minutes * 60) * 10) / 10

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        s_txt = f"{secs:.1f}".rstrip("0").rstrip(".")
        parts.append(f"{s_txt}s")
    return " ".join(parts)


def get_frame_count(duration_sec: float, fps: Optional[float]) -> Optional[int]:
    """Whole frames covered by `duration_sec`; None when fps is unknown."""
    try:
        rate = float(fps or 0.0)
    except (TypeError, ValueError):
        return None
    if rate <= 0:
        return None
    return int(math.floor(max(0.0, float(duration_sec)) * rate))
