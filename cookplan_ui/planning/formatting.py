from __future__ import annotations

import math


def format_mmss(total_seconds: float) -> str:
    seconds = max(0, math.floor(total_seconds))
    minutes, rem = divmod(seconds, 60)
    return f"{minutes}:{rem:02d}"


def format_duration(minutes: float) -> str:
    """65 -> "1h 5m", 60 -> "1h", 12 -> "12 min"."""
    total = max(0, math.floor(minutes + 0.5))
    if total < 60:
        return f"{total} min"
    hours, rem = divmod(total, 60)
    return f"{hours}h" if rem == 0 else f"{hours}h {rem}m"


def format_minutes(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_span(start_min: float, duration_min: float) -> str:
    return (
        f"{format_duration(duration_min)} "
        f"({format_minutes(start_min)}-{format_minutes(start_min + duration_min)}m)"
    )
