"""Read-only views handed to the display layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.timefmt import format_clock, format_fixed, format_time
from .record import GpsRecord


@dataclass(frozen=True)
class DisplayFields:
    clock: str
    elapsed: str
    speed: str
    alt: str
    position: str
    heading: str
    sats: str
    progress: str


@dataclass(frozen=True)
class Snapshot:
    index: int
    record: Optional[GpsRecord]
    total_count: int
    playing: bool = False
    elapsed: float = 0.0  # seconds since the first record

    @property
    def empty(self) -> bool:
        return self.record is None

    def display(self) -> Optional[DisplayFields]:
        """Formatted readout for the current record, or None when nothing is loaded."""
        r = self.record
        if r is None:
            return None
        return DisplayFields(
            clock=format_clock(r.timestamp),
            elapsed=format_time(self.elapsed),
            speed=format_fixed(r.speed, 1),
            alt=format_fixed(r.alt, 1),
            position=f"{format_fixed(r.lat, 6)} / {format_fixed(r.lon, 6)}",
            heading=f"{format_fixed(r.heading, 0)}°",
            sats=str(r.sats),
            progress=f"{self.index + 1} / {self.total_count}",
        )


__all__ = ["Snapshot", "DisplayFields"]
