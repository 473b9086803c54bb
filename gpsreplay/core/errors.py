"""Error taxonomy for the timeline engine.

Lower layers raise these; the engine facade folds load/export failures into
result values so a UI can report them without try/except at every call site.
"""

from __future__ import annotations


class GpsReplayError(Exception):
    """Base class for every engine-reported condition."""


class FileAccessError(GpsReplayError):
    """Source file unreadable or export target unwritable."""


class NoUsableDataError(GpsReplayError):
    """The file parsed, but not a single record survived ingestion."""


class MissingMarksError(GpsReplayError):
    """Selection export attempted without both in and out marks."""


class InvalidSeekError(GpsReplayError):
    """Explicit seek attempted while playback is running."""


class EmptySequenceError(GpsReplayError):
    """Operation needs loaded records (or at least a loaded header)."""


__all__ = [
    "GpsReplayError",
    "FileAccessError",
    "NoUsableDataError",
    "MissingMarksError",
    "InvalidSeekError",
    "EmptySequenceError",
]
