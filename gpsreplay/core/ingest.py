"""Lenient CSV ingestion for GPS logs.

Loggers in the field produce imperfect files: truncated rows, NUL padding from
interrupted writes, and timestamps where the space between date and time went
missing (``2026-01-1400:05:40.004``). Ingestion recovers what it can and
silently drops the rest; the only user-visible signal is the record count.

Rules:
 - line 0 is the header; names are stripped, order is kept for export
 - column 0 is always the timestamp, whatever its header says
 - other fields are looked up by header name; a missing column reads as "0"
 - rows shorter than the header are dropped
 - unparsable numbers become 0 / 0.0, they never drop a row
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence as Seq, Tuple

from dateutil import parser as date_parser

from .. import config
from .errors import FileAccessError
from .record import GpsRecord, Sequence

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
# Date glued onto the time with no separator, e.g. 2026-01-1400:05:40.004
_GLUED_TIMESTAMP = re.compile(r"^(\d{4}-\d{2}-\d{2})\s*(\d{2}:\d{2}:\d{2}\.\d+)")
# Invariant-culture numbers: decimal point, no grouping separators.
_FLOAT_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_TEXT = re.compile(r"[+-]?\d+")
# Two defaults that differ in every date part; text that leans on either of
# them for its year, month or day has no date of its own.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def normalize_timestamp(dt: datetime) -> datetime:
    """Aware datetimes become naive UTC so a sequence stays mutually comparable."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _generic_parse(text: str) -> Optional[datetime]:
    try:
        dt = date_parser.parse(text, default=_DEFAULT_A)
        if dt != date_parser.parse(text, default=_DEFAULT_B):
            return None
    except (ValueError, OverflowError):
        return None
    return normalize_timestamp(dt)


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse a timestamp, recovering the glued date/time pattern.

    Returns None when neither the generic parse nor the repaired text parse.
    """
    text = text.strip()
    if not text:
        return None
    dt = _generic_parse(text)
    if dt is not None:
        return dt
    m = _GLUED_TIMESTAMP.match(text)
    if m is None:
        return None
    return _generic_parse(f"{m.group(1)} {m.group(2)}")


def parse_float(text: str) -> float:
    text = text.strip()
    if not _FLOAT_TEXT.fullmatch(text):
        return 0.0
    value = float(text)
    if not math.isfinite(value):
        return 0.0  # 1e400 overflows to inf
    return value


def parse_int(text: str) -> int:
    text = text.strip()
    if not _INT_TEXT.fullmatch(text):
        return 0
    return int(text)


def split_header(line: str) -> List[str]:
    return [name.strip() for name in line.split(config.DELIMITER)]


def _field(cols: Seq[str], header: Seq[str], name: str) -> str:
    try:
        idx = header.index(name)
    except ValueError:
        return "0"
    if idx < len(cols):
        return cols[idx]
    return "0"


def parse_line(line: str, header: Seq[str]) -> Optional[GpsRecord]:
    """Parse one data line; None means the line is dropped."""
    clean = line.replace("\0", "").strip()
    cols = clean.split(config.DELIMITER)
    if len(cols) < len(header):
        return None
    time_text = cols[0].strip()
    ts = parse_timestamp(time_text)
    if ts is None:
        return None
    return GpsRecord(
        timestamp=ts,
        time_text=time_text,
        lat=parse_float(_field(cols, header, config.COL_LAT)),
        lon=parse_float(_field(cols, header, config.COL_LON)),
        alt=parse_float(_field(cols, header, config.COL_ALT)),
        speed=parse_float(_field(cols, header, config.COL_SPEED)),
        heading=parse_float(_field(cols, header, config.COL_HEADING)),
        sats=parse_int(_field(cols, header, config.COL_SATS)),
        raw_line=clean,
    )


def parse(text: str) -> Tuple[List[str], List[GpsRecord]]:
    """Parse raw delimited text into (header, records) in file order."""
    if not text:
        return [], []
    lines = _LINE_BREAK.split(text)
    header = split_header(lines[0])
    records: List[GpsRecord] = []
    dropped = 0
    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        rec = parse_line(line, header)
        if rec is None:
            dropped += 1
            logger.debug("dropped line %d: %r", lineno, line[:80])
            continue
        records.append(rec)
    if dropped:
        logger.debug("%d malformed line(s) dropped", dropped)
    return header, records


def load(path: str | Path) -> Sequence:
    """Read and parse a whole file. Raises FileAccessError on read failure."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"cannot read {p}: {e}") from e
    header, records = parse(text)
    logger.info("loaded %d record(s) from %s", len(records), p.name)
    return Sequence(header=tuple(header), records=tuple(records), source_path=p)


__all__ = [
    "parse",
    "parse_line",
    "parse_timestamp",
    "normalize_timestamp",
    "parse_float",
    "parse_int",
    "split_header",
    "load",
]
