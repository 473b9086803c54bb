"""Formatting helpers for readouts and summaries.

Fixed-point output uses ROUND_HALF_UP on the decimal repr so 0.25 shows as
0.3 rather than Python's bankers/binary rounding result.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

__all__ = ["format_fixed", "format_time", "format_clock"]


def format_fixed(value: float, places: int) -> str:
    """Fixed-point string with half-up rounding (1.25 -> '1.3' at 1 place)."""
    quantum = Decimal(1).scaleb(-places)
    d = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if d == 0:
        d = abs(d)  # no "-0.0"
    return f"{d:.{places}f}"


def format_time(seconds: float) -> str:
    """Return mm:ss.mmm for elapsed-time labels. Negative clamps to 0."""
    if seconds < 0:
        seconds = 0.0
    ms_total = int(
        (Decimal(str(seconds)) * Decimal(1000)).to_integral_value(
            rounding=ROUND_HALF_UP
        )
    )
    m, rem = divmod(ms_total, 60000)
    s, ms = divmod(rem, 1000)
    return f"{m:02d}:{s:02d}.{ms:03d}"


def format_clock(t: datetime) -> str:
    """HH:MM:SS.ff wall-clock readout; hundredths are truncated, not rounded."""
    return f"{t:%H:%M:%S}.{t.microsecond // 10000:02d}"
