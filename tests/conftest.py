from datetime import datetime, timedelta

import pytest

HEADER = "Time,Lat,Lon,Alt,Speed_kmh,Heading,Sats"
T0 = datetime(2026, 1, 14, 0, 5, 40, 4000)


class FakeClock:
    """Stand-in for time.perf_counter; tests move ``now`` by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_row(i: int, step_ms: int = 100) -> str:
    t = T0 + timedelta(milliseconds=step_ms * i)
    stamp = t.strftime("%Y-%m-%d %H:%M:%S.") + f"{t.microsecond // 1000:03d}"
    return f"{stamp},{31.23 + i * 0.0001:.6f},121.473701,12.5,{30 + i}.0,90.0,9"


def make_csv(count: int, step_ms: int = 100) -> str:
    return "\n".join([HEADER] + [make_row(i, step_ms) for i in range(count)]) + "\n"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def csv_file(tmp_path):
    """Factory writing a well-formed log of ``count`` rows 100 ms apart."""

    def _write(count: int = 20, name: str = "drive.csv", step_ms: int = 100):
        p = tmp_path / name
        p.write_text(make_csv(count, step_ms), encoding="utf-8")
        return p

    return _write
