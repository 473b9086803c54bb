"""Top-level package exports.

Public API surface (keep minimal):
 - GpsEngine, LoadResult, ExportResult (engine facade)
 - GpsRecord, Sequence (loaded data)
 - GpsReplayError and subclasses (reported conditions)

The Qt tick driver lives in `gpsreplay.media.playback` and is imported
explicitly by UI code.
"""

from .core.engine import GpsEngine, LoadResult, ExportResult  # noqa: F401
from .core.record import GpsRecord, Sequence  # noqa: F401
from .core.errors import (  # noqa: F401
    GpsReplayError,
    FileAccessError,
    NoUsableDataError,
    MissingMarksError,
    InvalidSeekError,
    EmptySequenceError,
)

__all__ = [
    "GpsEngine",
    "LoadResult",
    "ExportResult",
    "GpsRecord",
    "Sequence",
    "GpsReplayError",
    "FileAccessError",
    "NoUsableDataError",
    "MissingMarksError",
    "InvalidSeekError",
    "EmptySequenceError",
]
