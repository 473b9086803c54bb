from datetime import datetime

import pytest

from gpsreplay.core import ingest
from gpsreplay.core.errors import FileAccessError

from conftest import HEADER, T0


def test_recovers_glued_timestamp():
    glued = ingest.parse_timestamp("2026-01-1400:05:40.004")
    spaced = ingest.parse_timestamp("2026-01-14 00:05:40.004")
    assert glued == spaced == datetime(2026, 1, 14, 0, 5, 40, 4000)


def test_unparsable_timestamp_is_none():
    assert ingest.parse_timestamp("garbage") is None
    assert ingest.parse_timestamp("   ") is None


def test_aware_timestamp_normalized_to_naive_utc():
    assert ingest.parse_timestamp("2026-01-14T08:00:00+08:00") == datetime(2026, 1, 14, 0, 0, 0)


def test_record_count_excludes_blank_short_and_bad_time():
    text = "\n".join(
        [
            HEADER,
            "2026-01-14 00:05:40.004,31.2,121.4,12.5,35.2,90.0,9",
            "",
            "   ",
            "2026-01-14 00:05:40.104,31.2,121.4",  # short
            "garbage,31.2,121.4,12.5,35.2,90.0,9",  # bad timestamp
            "2026-01-1400:05:40.204,31.2,121.4,12.5,35.2,90.0,9",  # glued
            "2026-01-14 00:05:40.304,31.2,121.4,12.5,35.2,90.0,9",
        ]
    )
    header, records = ingest.parse(text)
    assert header == HEADER.split(",")
    assert len(records) == 3
    assert records[1].time_text == "2026-01-1400:05:40.204"
    assert records[1].timestamp == datetime(2026, 1, 14, 0, 5, 40, 204000)


def test_header_names_trimmed_and_fields_by_name():
    text = " Sats , Time ,Heading,Lat,Lon,Alt,Speed_kmh\n" + "x,y,z,1,2,3,4\n"
    header, records = ingest.parse(text)
    assert header == ["Sats", "Time", "Heading", "Lat", "Lon", "Alt", "Speed_kmh"]
    # column 0 is the timestamp regardless of its name: "x" is not a time
    assert records == []

    text = "Time,Sats,Speed_kmh,Lat,Lon\n2026-01-14 00:05:40.004,7,50.5,1.5,2.5\n"
    _, records = ingest.parse(text)
    (r,) = records
    assert (r.sats, r.speed, r.lat, r.lon) == (7, 50.5, 1.5, 2.5)
    assert r.alt == 0.0 and r.heading == 0.0


def test_missing_heading_column_defaults_to_zero():
    text = "Time,Lat,Lon,Alt,Speed_kmh,Sats\n" + "\n".join(
        f"2026-01-14 00:05:4{i}.000,31.2,121.4,12.5,35.2,9" for i in range(3)
    )
    _, records = ingest.parse(text)
    assert len(records) == 3
    assert all(r.heading == 0.0 for r in records)
    assert all(r.sats == 9 for r in records)


def test_bad_numbers_default_without_dropping_row():
    text = HEADER + "\n2026-01-14 00:05:40.004,abc,1_000,nan, 1.5e1 ,+90,9.0\n"
    _, records = ingest.parse(text)
    (r,) = records
    assert r.lat == 0.0
    assert r.lon == 0.0  # no grouping/underscore separators
    assert r.alt == 0.0
    assert r.speed == 15.0
    assert r.heading == 90.0
    assert r.sats == 0  # integer text only


def test_raw_line_cleaned_and_time_text_verbatim():
    line = "\0  2026-01-14 00:05:40.004 , 31.2300 ,121.47,12.5,35.2,90.0,9  \0"
    _, records = ingest.parse(HEADER + "\r\n" + line + "\r\n")
    (r,) = records
    assert r.raw_line == "2026-01-14 00:05:40.004 , 31.2300 ,121.47,12.5,35.2,90.0,9"
    assert r.time_text == "2026-01-14 00:05:40.004"
    assert r.timestamp == T0
    assert r.lat == 31.23


def test_extra_columns_tolerated():
    text = HEADER + "\n2026-01-14 00:05:40.004,1,2,3,4,5,6,extra,more\n"
    _, records = ingest.parse(text)
    assert len(records) == 1
    assert records[0].sats == 6


def test_source_order_kept():
    text = "\n".join(
        [
            HEADER,
            "2026-01-14 00:05:42.000,0,0,0,0,0,1",
            "2026-01-14 00:05:40.000,0,0,0,0,0,2",
            "2026-01-14 00:05:41.000,0,0,0,0,0,3",
        ]
    )
    _, records = ingest.parse(text)
    assert [r.sats for r in records] == [1, 2, 3]


def test_empty_and_header_only_inputs():
    assert ingest.parse("") == ([], [])
    header, records = ingest.parse(HEADER + "\n")
    assert header == HEADER.split(",") and records == []


def test_load_reads_file_with_bom(tmp_path):
    p = tmp_path / "bom.csv"
    p.write_text(HEADER + "\n2026-01-14 00:05:40.004,1,2,3,4,5,6\n", encoding="utf-8-sig")
    seq = ingest.load(p)
    assert seq.header[0] == "Time"
    assert len(seq) == 1
    assert seq.source_path == p


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileAccessError):
        ingest.load(tmp_path / "nope.csv")


def test_overflowing_number_reads_as_zero():
    assert ingest.parse_float("1e400") == 0.0
    assert ingest.parse_float("-1e400") == 0.0
    assert ingest.parse_float("1e300") == 1e300
    _, records = ingest.parse(HEADER + "\n2026-01-14 00:05:40.004,1e400,2,3,4,5,6\n")
    (r,) = records
    assert r.lat == 0.0 and r.lon == 2.0


def test_time_without_date_is_dropped():
    assert ingest.parse_timestamp("5") is None
    assert ingest.parse_timestamp("12") is None
    assert ingest.parse_timestamp("00:05:40.004") is None
    assert ingest.parse_timestamp("2026-01-14") == datetime(2026, 1, 14)
    text = HEADER + "\n5,1,2,3,4,5,6\n2026-01-14 00:05:40.004,1,2,3,4,5,6\n"
    _, records = ingest.parse(text)
    (r,) = records
    assert r.timestamp == T0
