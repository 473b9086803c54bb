"""Qt playback driver for the GPS timeline engine.

The engine itself never schedules anything; ``tick`` must be called
periodically while playing. PlaybackDriver owns a precise QTimer on the Qt
event loop (default ~33 ms / 30 Hz) and translates engine results into
signals a window can bind to:

    cursorChanged(int)    # new cursor index; only when it actually moved
    stateChanged(str)     # 'playing' | 'stopped'
    finished()            # playback ran off the end of the data (once)
    loaded(int)           # record count after load_file (0 on failure)
    marksChanged()        # in/out marks set or cleared
    notice(str)           # human-readable message for toast/status/log
    exportProgress(float) # 0.0 - 1.0 while an export is written

Slider scrubbing: ``beginScrub`` stops playback while the user drags,
``preview`` lets the window show any index without moving the cursor, and
``endScrub(index)`` commits the drag position as a seek. Playback is not
resumed after a drag.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Qt, Signal

from ..config import PlaybackSettings
from ..core.engine import ExportResult, GpsEngine, LoadResult
from ..core.snapshot import Snapshot

logger = logging.getLogger(__name__)


class PlaybackDriver(QObject):
    cursorChanged = Signal(int)
    stateChanged = Signal(str)
    finished = Signal()
    loaded = Signal(int)
    marksChanged = Signal()
    notice = Signal(str)
    exportProgress = Signal(float)

    def __init__(
        self,
        engine: Optional[GpsEngine] = None,
        parent: Optional[QObject] = None,
        *,
        settings: Optional[PlaybackSettings] = None,
    ):
        super().__init__(parent)
        self._engine = engine if engine is not None else GpsEngine()
        self._settings = settings or PlaybackSettings()
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._tick)

    @property
    def engine(self) -> GpsEngine:
        return self._engine

    def isPlaying(self) -> bool:
        return self._engine.playing

    # --- Loading ---
    def load(self, path: str | Path) -> LoadResult:
        self._stopTimer()
        result = self._engine.load_file(path)
        self.stateChanged.emit("stopped")
        self.marksChanged.emit()
        if result.ok:
            self.notice.emit(f"Loaded {result.record_count} records")
        else:
            self.notice.emit(f"Load failed: {result.error}")
        self.loaded.emit(result.record_count)
        self.cursorChanged.emit(self._engine.current_snapshot().index)
        return result

    # --- Transport ---
    def play(self):
        if not self._engine.record_count:
            return
        before = self._engine.current_snapshot().index
        self._engine.play()
        if not self._timer.isActive():
            self._timer.start(self._settings.tick_interval_ms)
        self.stateChanged.emit("playing")
        after = self._engine.current_snapshot().index
        if after != before:  # rewound from the end
            self.cursorChanged.emit(after)

    def pause(self):
        was_playing = self._engine.playing
        self._stopTimer()
        self._engine.pause()
        if was_playing:
            self.stateChanged.emit("stopped")

    def togglePlay(self):
        if self._engine.playing:
            self.pause()
        else:
            self.play()

    def seek(self, index: int):
        if not self._engine.record_count:
            return
        self.pause()
        self.cursorChanged.emit(self._engine.seek(index))

    def stepPrev(self):
        if not self._engine.record_count:
            return
        self.pause()
        self.cursorChanged.emit(self._engine.step_prev())

    def stepNext(self):
        if not self._engine.record_count:
            return
        self.pause()
        self.cursorChanged.emit(self._engine.step_next())

    # --- Scrubbing ---
    def beginScrub(self):
        self.pause()

    def preview(self, index: int) -> Snapshot:
        return self._engine.preview(index)

    def endScrub(self, index: int):
        self.seek(index)

    # --- Marks / export ---
    def markIn(self):
        if not self._engine.record_count:
            return
        self._engine.mark_in()
        self.marksChanged.emit()

    def markOut(self):
        if not self._engine.record_count:
            return
        self._engine.mark_out()
        self.marksChanged.emit()

    def clearMarks(self):
        self._engine.clear_marks()
        self.marksChanged.emit()

    def exportSelection(self, output_path=None) -> ExportResult:
        progress = self.exportProgress.emit
        return self._report(self._engine.export_selection(output_path, progress))

    def exportTrim(self, keep_front: bool, output_path=None) -> ExportResult:
        progress = self.exportProgress.emit
        return self._report(self._engine.export_trim(keep_front, output_path, progress))

    def exportCut(self, timestamp, output_path=None) -> ExportResult:
        progress = self.exportProgress.emit
        return self._report(self._engine.export_cut(timestamp, output_path, progress))

    # Internal
    def _report(self, result: ExportResult) -> ExportResult:
        if result.ok:
            self.notice.emit(f"Saved {result.rows_written} rows to {result.path.name}")
        else:
            self.notice.emit(f"Save failed: {result.error}")
        return result

    def _stopTimer(self):
        if self._timer.isActive():
            self._timer.stop()

    def _tick(self):
        outcome = self._engine.tick()
        if outcome.advanced:
            self.cursorChanged.emit(outcome.index)
        if outcome.finished:
            self._stopTimer()
            logger.debug("playback finished at index %d", outcome.index)
            self.stateChanged.emit("stopped")
            self.finished.emit()
            self.notice.emit("Playback finished")
        elif not self._engine.playing:
            self._stopTimer()


__all__ = ["PlaybackDriver"]
