"""Record and Sequence value types.

A Record is one parsed GPS sample that still carries its verbatim source text,
so exports can copy rows back out byte-for-byte. A Sequence is everything one
file load produced: the header plus the records in file order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from functools import cached_property
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import numpy as np

_ONE_US = timedelta(microseconds=1)


@dataclass(frozen=True)
class GpsRecord:
    timestamp: datetime
    time_text: str  # first column exactly as read (pre-fix)
    lat: float = 0.0
    lon: float = 0.0
    alt: float = 0.0
    speed: float = 0.0  # km/h
    heading: float = 0.0  # degrees
    sats: int = 0
    raw_line: str = ""  # cleaned source line, written back on export


@dataclass(frozen=True)
class Sequence:
    header: Tuple[str, ...] = ()
    records: Tuple[GpsRecord, ...] = ()
    source_path: Optional[Path] = field(default=None, compare=False)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> GpsRecord:
        return self.records[index]

    def __iter__(self) -> Iterator[GpsRecord]:
        return iter(self.records)

    @property
    def last_index(self) -> int:
        return len(self.records) - 1

    @cached_property
    def offsets_us(self) -> np.ndarray:
        """Microseconds of each record relative to the first record.

        Integer offsets keep the <=/>= boundary comparisons exact.
        """
        if not self.records:
            return np.empty(0, dtype=np.int64)
        t0 = self.records[0].timestamp
        return np.fromiter(
            ((r.timestamp - t0) // _ONE_US for r in self.records),
            dtype=np.int64,
            count=len(self.records),
        )

    def _offset_of(self, t: datetime) -> int:
        return (t - self.records[0].timestamp) // _ONE_US

    def at_or_before(self, t: datetime) -> List[GpsRecord]:
        if not self.records:
            return []
        mask = self.offsets_us <= self._offset_of(t)
        return [self.records[i] for i in np.flatnonzero(mask)]

    def at_or_after(self, t: datetime) -> List[GpsRecord]:
        if not self.records:
            return []
        mask = self.offsets_us >= self._offset_of(t)
        return [self.records[i] for i in np.flatnonzero(mask)]

    def span(self, start: int, end: int) -> List[GpsRecord]:
        """Inclusive index slice."""
        return list(self.records[start : end + 1])


__all__ = ["GpsRecord", "Sequence"]
