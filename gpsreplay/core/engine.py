"""Engine facade: the single object a UI talks to.

Owns the loaded Sequence, the TimelinePlayer cursor and the selection marks.
UI callbacks become thin calls into this API and render ``current_snapshot``.

Public API:
    load_file(path) -> LoadResult
    play() / pause() / toggle_play() / tick()
    seek(index) / step_prev() / step_next() / preview(index)
    current_snapshot() -> Snapshot
    mark_in() / mark_out() / clear_marks() / selection_summary()
    export_selection(path) / export_trim(keep_front, path) / export_cut(ts, path)
        -> ExportResult; each export also takes an optional progress callback

Load and export never raise for expected failures; the condition is carried in
the result's ``error``. Playback and marking on an empty engine raise
EmptySequenceError.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple

from ..config import ExportSettings
from ..services import export as exporter
from ..services.export import ProgressCallback
from . import ingest
from .errors import EmptySequenceError, GpsReplayError, NoUsableDataError
from .player import Clock, TickOutcome, TimelinePlayer
from .record import Sequence
from .selection import SelectionMarks, SelectionSummary
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    record_count: int
    error: Optional[GpsReplayError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ExportResult:
    rows_written: int
    path: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GpsEngine:
    def __init__(
        self,
        clock: Clock = time.perf_counter,
        export_settings: ExportSettings | None = None,
    ):
        self._player = TimelinePlayer(clock=clock)
        self._marks = SelectionMarks()
        self._export_settings = export_settings or ExportSettings()

    # --- Loading ---
    def load_file(self, path: str | Path) -> LoadResult:
        # Previous data is discarded up front, even if the new read fails.
        self._player.load(Sequence())
        self._marks.clear()
        try:
            seq = ingest.load(path)
        except GpsReplayError as e:
            logger.warning("load failed: %s", e)
            return LoadResult(0, e)
        self._player.load(seq)
        if not len(seq):
            err = NoUsableDataError(f"no usable records in {Path(path).name}")
            logger.warning("%s", err)
            return LoadResult(0, err)
        return LoadResult(len(seq))

    @property
    def sequence(self) -> Sequence:
        return self._player.sequence

    @property
    def record_count(self) -> int:
        return len(self._player.sequence)

    # --- Transport ---
    @property
    def playing(self) -> bool:
        return self._player.playing

    def play(self) -> None:
        self._player.start()

    def pause(self) -> None:
        self._player.stop()

    def toggle_play(self) -> bool:
        """Play when stopped, pause when playing. Returns the new playing flag."""
        if self._player.playing:
            self._player.stop()
        else:
            self._player.start()
        return self._player.playing

    def tick(self) -> TickOutcome:
        return self._player.tick()

    def seek(self, index: int) -> int:
        """Stop playback (a user seek always interrupts it), then seek clamped."""
        self._player.stop()
        return self._player.seek(index)

    def step_prev(self) -> int:
        return self._player.step_prev()

    def step_next(self) -> int:
        return self._player.step_next()

    # --- Views ---
    def _snapshot_at(self, index: int) -> Snapshot:
        seq = self._player.sequence
        if not len(seq):
            return Snapshot(index=0, record=None, total_count=0)
        index = max(0, min(index, seq.last_index))
        rec = seq[index]
        return Snapshot(
            index=index,
            record=rec,
            total_count=len(seq),
            playing=self._player.playing,
            elapsed=(rec.timestamp - seq[0].timestamp).total_seconds(),
        )

    def current_snapshot(self) -> Snapshot:
        return self._snapshot_at(self._player.index)

    def preview(self, index: int) -> Snapshot:
        """Snapshot of any index without moving the cursor (slider drag)."""
        return self._snapshot_at(index)

    # --- Selection ---
    def mark_in(self) -> int:
        self._require_records()
        self._marks.mark_in = self._player.index
        return self._marks.mark_in

    def mark_out(self) -> int:
        self._require_records()
        self._marks.mark_out = self._player.index
        return self._marks.mark_out

    def clear_marks(self) -> None:
        self._marks.clear()

    @property
    def marks(self) -> Tuple[Optional[int], Optional[int]]:
        return self._marks.mark_in, self._marks.mark_out

    def selection_summary(self) -> SelectionSummary:
        return self._marks.summary(self._player.sequence)

    # --- Export ---
    def default_export_path(self, kind: str) -> Path:
        src = self._player.sequence.source_path
        if src is None:
            raise EmptySequenceError("no file loaded")
        return exporter.export_path_for(src, kind, self._export_settings)

    def export_selection(
        self,
        output_path: str | Path | None = None,
        progress: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        return self._export(
            "clip",
            output_path,
            lambda p: exporter.export_selection(
                self.sequence, self._marks, p, self._export_settings, progress
            ),
        )

    def export_trim(
        self,
        keep_front: bool,
        output_path: str | Path | None = None,
        progress: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        return self._export(
            "head" if keep_front else "tail",
            output_path,
            lambda p: exporter.export_trim(
                self.sequence,
                self._player.index,
                keep_front,
                p,
                self._export_settings,
                progress,
            ),
        )

    def export_cut(
        self,
        timestamp: datetime | str,
        output_path: str | Path | None = None,
        progress: Optional[ProgressCallback] = None,
    ) -> ExportResult:
        if isinstance(timestamp, str):
            parsed = ingest.parse_timestamp(timestamp)
            if parsed is None:
                err = ValueError(f"unparsable timestamp: {timestamp!r}")
                logger.warning("export failed: %s", err)
                return ExportResult(0, None, err)
            timestamp = parsed
        else:
            timestamp = ingest.normalize_timestamp(timestamp)
        return self._export(
            "cut",
            output_path,
            lambda p: exporter.export_cut(
                self.sequence, timestamp, p, self._export_settings, progress
            ),
        )

    def _export(
        self,
        kind: str,
        output_path: str | Path | None,
        run: Callable[[Path], int],
    ) -> ExportResult:
        try:
            p = Path(output_path) if output_path is not None else self.default_export_path(kind)
            rows = run(p)
        except GpsReplayError as e:
            logger.warning("export failed: %s", e)
            return ExportResult(0, None, e)
        return ExportResult(rows, p)

    def _require_records(self) -> None:
        if not self.record_count:
            raise EmptySequenceError("no records loaded")


__all__ = ["GpsEngine", "LoadResult", "ExportResult"]
