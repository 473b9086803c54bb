"""Static configuration for ingestion, playback and export.

Everything here is code-level; there is no environment or file based config.
"""

from __future__ import annotations

from typing import Dict, Optional

DELIMITER = ","

# Logical columns looked up by header name. The timestamp is always column 0.
COL_LAT = "Lat"
COL_LON = "Lon"
COL_ALT = "Alt"
COL_SPEED = "Speed_kmh"
COL_HEADING = "Heading"
COL_SATS = "Sats"

# Export kinds -> filename suffix
EXPORT_SUFFIXES: Dict[str, str] = {
    "clip": "_clip",
    "head": "_head",
    "tail": "_tail",
    "cut": "_cut",
}


class PlaybackSettings:
    def __init__(self, tick_interval_ms: int = 33):
        # ~30 Hz; smoothness only, correctness does not depend on it
        self.tick_interval_ms = tick_interval_ms


class ExportSettings:
    def __init__(
        self,
        extension: str = ".csv",
        encoding: str = "utf-8",
        newline: str = "\n",
        suffixes: Optional[Dict[str, str]] = None,
    ):
        self.extension = extension
        self.encoding = encoding
        self.newline = newline
        self.suffixes = dict(EXPORT_SUFFIXES if suffixes is None else suffixes)

    def suffix_for(self, kind: str) -> str:
        try:
            return self.suffixes[kind]
        except KeyError:
            raise ValueError(f"unknown export kind: {kind!r}") from None


__all__ = [
    "DELIMITER",
    "COL_LAT",
    "COL_LON",
    "COL_ALT",
    "COL_SPEED",
    "COL_HEADING",
    "COL_SATS",
    "EXPORT_SUFFIXES",
    "PlaybackSettings",
    "ExportSettings",
]
