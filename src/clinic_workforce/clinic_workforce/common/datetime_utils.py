from __future__ import annotations

from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_TWO_PLACES = Decimal("0.01")


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Elapsed hours rounded to 2 decimals (half-up)."""
    seconds = Decimal(str((end - start).total_seconds()))
    return (seconds / Decimal(3600)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def format_clock_time(value: Optional[datetime | time]) -> str:
    """Render a clock time the way dashboards show it, e.g. ``9:05:00 AM``."""
    if value is None:
        return ""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d}:{value.second:02d} {suffix}"
