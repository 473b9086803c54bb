"""In/out selection marks over a Sequence.

Marks are plain indices and may be set in either order; ``bounds`` normalizes
them at use time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..utils.timefmt import format_fixed
from .errors import MissingMarksError
from .record import GpsRecord, Sequence

PLACEHOLDER = "--:--"
NO_SELECTION = "no selection"


def _time_part(record: GpsRecord) -> str:
    # "2026-01-14 00:05:40.004" -> "00:05:40.004"
    _, sep, rest = record.time_text.partition(" ")
    return rest if sep else record.time_text


@dataclass(frozen=True)
class SelectionSummary:
    in_text: Optional[str] = None
    out_text: Optional[str] = None
    duration: Optional[float] = None  # seconds, only when both marks set

    @property
    def empty(self) -> bool:
        return self.in_text is None and self.out_text is None

    def __str__(self) -> str:
        if self.empty:
            return NO_SELECTION
        text = f"{self.in_text or PLACEHOLDER} ~ {self.out_text or PLACEHOLDER}"
        if self.duration is not None:
            text += f" ({format_fixed(self.duration, 1)}s)"
        return text


@dataclass
class SelectionMarks:
    mark_in: Optional[int] = None
    mark_out: Optional[int] = None

    def clear(self) -> None:
        self.mark_in = None
        self.mark_out = None

    @property
    def complete(self) -> bool:
        return self.mark_in is not None and self.mark_out is not None

    def bounds(self) -> Tuple[int, int]:
        """(start, end) inclusive, whichever mark was set first."""
        if not self.complete:
            raise MissingMarksError("set both in and out marks first")
        return min(self.mark_in, self.mark_out), max(self.mark_in, self.mark_out)

    def summary(self, sequence: Sequence) -> SelectionSummary:
        if self.mark_in is None and self.mark_out is None:
            return SelectionSummary()
        rin = sequence[self.mark_in] if self.mark_in is not None else None
        rout = sequence[self.mark_out] if self.mark_out is not None else None
        duration = None
        if rin is not None and rout is not None:
            duration = abs((rout.timestamp - rin.timestamp).total_seconds())
        return SelectionSummary(
            in_text=_time_part(rin) if rin is not None else None,
            out_text=_time_part(rout) if rout is not None else None,
            duration=duration,
        )


__all__ = ["SelectionMarks", "SelectionSummary", "PLACEHOLDER", "NO_SELECTION"]
