"""Export pipeline: slice a loaded Sequence and write it back out as CSV.

Every export writes the original header, then each selected record's
``raw_line`` verbatim. Rows are never rebuilt from parsed fields, so a
retained row is byte-identical to the cleaned source line, formatting quirks
included.

Selections:
 - clip: inclusive index range between the in/out marks
 - head: records with timestamp <= the anchor record's timestamp
 - tail: records with timestamp >= the anchor record's timestamp
 - cut:  records with timestamp >= an arbitrary instant

head/tail/cut are timestamp predicates over the whole sequence, not index
slices; with out-of-order data they may keep non-contiguous rows.

An empty result still produces a valid header-only file.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from .. import config
from ..config import ExportSettings
from ..core.errors import EmptySequenceError, FileAccessError
from ..core.record import GpsRecord, Sequence
from ..core.selection import SelectionMarks

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]  # 0.0 - 1.0


def export_path_for(
    source: str | Path, kind: str, settings: ExportSettings | None = None
) -> Path:
    """Suggested output path: ``<dir>/<stem><suffix><ext>`` beside the source."""
    settings = settings or ExportSettings()
    src = Path(source)
    return src.with_name(src.stem + settings.suffix_for(kind) + settings.extension)


def write_records(
    header: Iterable[str],
    records: Iterable[GpsRecord],
    output_path: str | Path,
    settings: ExportSettings | None = None,
    progress: Optional[ProgressCallback] = None,
) -> int:
    """Write header + raw lines. Returns the number of data rows written."""
    settings = settings or ExportSettings()
    rows = list(records)
    p = Path(output_path)
    nl = settings.newline
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding=settings.encoding, newline="") as f:
            f.write(config.DELIMITER.join(header) + nl)
            for i, rec in enumerate(rows, 1):
                f.write(rec.raw_line + nl)
                if progress and i % 1000 == 0:
                    progress(i / len(rows))
    except OSError as e:
        raise FileAccessError(f"cannot write {p}: {e}") from e
    if progress:
        progress(1.0)
    logger.info("wrote %d row(s) to %s", len(rows), p)
    return len(rows)


def _require_header(sequence: Sequence) -> None:
    if not sequence.header:
        raise EmptySequenceError("no file loaded")


def export_selection(
    sequence: Sequence,
    marks: SelectionMarks,
    output_path: str | Path,
    settings: ExportSettings | None = None,
    progress: Optional[ProgressCallback] = None,
) -> int:
    _require_header(sequence)
    start, end = marks.bounds()
    return write_records(
        sequence.header, sequence.span(start, end), output_path, settings, progress
    )


def export_trim(
    sequence: Sequence,
    anchor_index: int,
    keep_front: bool,
    output_path: str | Path,
    settings: ExportSettings | None = None,
    progress: Optional[ProgressCallback] = None,
) -> int:
    """Keep records on one side of the anchor record's timestamp (inclusive)."""
    _require_header(sequence)
    if not len(sequence):
        rows = []
    else:
        anchor = sequence[anchor_index].timestamp
        rows = sequence.at_or_before(anchor) if keep_front else sequence.at_or_after(anchor)
    return write_records(sequence.header, rows, output_path, settings, progress)


def export_cut(
    sequence: Sequence,
    from_timestamp: datetime,
    output_path: str | Path,
    settings: ExportSettings | None = None,
    progress: Optional[ProgressCallback] = None,
) -> int:
    _require_header(sequence)
    rows = sequence.at_or_after(from_timestamp)
    return write_records(sequence.header, rows, output_path, settings, progress)


__all__ = [
    "ExportSettings",
    "ProgressCallback",
    "export_path_for",
    "write_records",
    "export_selection",
    "export_trim",
    "export_cut",
]
