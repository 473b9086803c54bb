"""Timeline player: wall-clock synchronized cursor over a loaded Sequence.

The player maps elapsed real time onto data time. On ``start`` it captures an
anchor pair (wall clock, timestamp of the cursor record); every ``tick``
computes ``target = anchor_data + (now - anchor_wall)`` and scans forward from
the cursor for the first record at or after ``target``. The scan never moves
backward and resumes from the last match, so each tick costs only the records
advanced since the previous one. This relies on ascending timestamps; a file
with out-of-order rows stalls the cursor instead of being repaired.

Pausing is stopping: the cursor stays where it is and the next ``start``
re-anchors from there.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .errors import EmptySequenceError, InvalidSeekError
from .record import Sequence

logger = logging.getLogger(__name__)

Clock = Callable[[], float]  # monotonic seconds


@dataclass(frozen=True)
class TickOutcome:
    index: int
    advanced: bool = False  # cursor moved this tick
    finished: bool = False  # playback ran past the last record this tick


@dataclass
class PlaybackState:
    index: int = 0
    playing: bool = False
    anchor_wall: Optional[float] = None
    anchor_data: Optional[datetime] = None


class TimelinePlayer:
    def __init__(self, sequence: Optional[Sequence] = None, clock: Clock = time.perf_counter):
        self._clock = clock
        self._sequence = sequence if sequence is not None else Sequence()
        self._state = PlaybackState()

    # --- Loading ---
    def load(self, sequence: Sequence) -> None:
        """Replace the sequence; always stops and rewinds to index 0."""
        self._sequence = sequence
        self._state = PlaybackState()

    @property
    def sequence(self) -> Sequence:
        return self._sequence

    @property
    def index(self) -> int:
        return self._state.index

    @property
    def playing(self) -> bool:
        return self._state.playing

    # --- Transport ---
    def start(self) -> None:
        seq = self._require_records()
        if self._state.playing:
            return
        if self._state.index >= seq.last_index:
            self._state.index = 0
        self._state.anchor_wall = self._clock()
        self._state.anchor_data = seq[self._state.index].timestamp
        self._state.playing = True
        logger.debug("play from index %d", self._state.index)

    def stop(self) -> None:
        if not self._state.playing:
            return
        self._state.playing = False
        self._state.anchor_wall = None
        logger.debug("stopped at index %d", self._state.index)

    def tick(self) -> TickOutcome:
        st = self._state
        seq = self._sequence
        if not st.playing or not len(seq):
            return TickOutcome(st.index)
        elapsed = self._clock() - st.anchor_wall
        target = st.anchor_data + timedelta(seconds=elapsed)

        new_index = st.index
        end_reached = False
        for i in range(st.index, len(seq)):
            if seq[i].timestamp >= target:
                new_index = i
                break
            if i == seq.last_index:
                end_reached = True

        finished = False
        if end_reached and target > seq[seq.last_index].timestamp:
            self.stop()
            new_index = seq.last_index
            finished = True

        advanced = new_index != st.index
        st.index = new_index
        return TickOutcome(new_index, advanced=advanced, finished=finished)

    # --- Positioning ---
    def seek(self, index: int) -> int:
        seq = self._require_records()
        if self._state.playing:
            raise InvalidSeekError("stop playback before seeking")
        self._state.index = max(0, min(int(index), seq.last_index))
        return self._state.index

    def step_prev(self) -> int:
        self._require_records()
        self.stop()
        return self.seek(self._state.index - 1)

    def step_next(self) -> int:
        self._require_records()
        self.stop()
        return self.seek(self._state.index + 1)

    def _require_records(self) -> Sequence:
        if not len(self._sequence):
            raise EmptySequenceError("no records loaded")
        return self._sequence


__all__ = ["TimelinePlayer", "TickOutcome", "PlaybackState", "Clock"]
