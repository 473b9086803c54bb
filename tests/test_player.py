import pytest

from gpsreplay.core import ingest
from gpsreplay.core.errors import EmptySequenceError, InvalidSeekError
from gpsreplay.core.player import TimelinePlayer
from gpsreplay.core.record import Sequence

from conftest import make_csv


def _player(clock, count=20):
    header, records = ingest.parse(make_csv(count))
    return TimelinePlayer(Sequence(tuple(header), tuple(records)), clock=clock)


def test_tick_maps_wall_clock_onto_data_time(clock):
    p = _player(clock)
    p.start()
    clock.now = 1.0
    out = p.tick()
    assert out.index == 10 and out.advanced and not out.finished
    # no time passed: no advance reported
    out = p.tick()
    assert out.index == 10 and not out.advanced


def test_playback_monotonic(clock):
    p = _player(clock)
    p.start()
    indices = []
    for _ in range(100):
        clock.now += 0.033
        indices.append(p.tick().index)
    assert indices == sorted(indices), "cursor should never move backward"
    assert max(indices) <= 19
    assert indices[-1] == 19


def test_playback_finishes_exactly_once(clock):
    p = _player(clock)
    p.start()
    finishes = 0
    for now in (0.5, 1.9, 2.5, 3.0, 10.0):
        clock.now = now
        finishes += p.tick().finished
    assert finishes == 1
    assert p.index == 19
    assert not p.playing


def test_start_at_end_rewinds(clock):
    p = _player(clock)
    p.seek(19)
    p.start()
    assert p.index == 0 and p.playing


def test_pause_resumes_from_cursor(clock):
    p = _player(clock)
    p.start()
    clock.now = 1.0
    p.tick()
    p.stop()
    clock.now = 100.0  # time spent paused must not count
    assert p.tick().index == 10
    p.start()
    clock.now = 100.25
    assert p.tick().index == 13


def test_seek_clamps_and_requires_stopped(clock):
    p = _player(clock)
    assert p.seek(-5) == 0
    assert p.seek(500) == 19
    p.seek(3)
    p.start()
    with pytest.raises(InvalidSeekError):
        p.seek(5)
    assert p.index == 3


def test_steps_stop_playback_and_clamp(clock):
    p = _player(clock)
    p.start()
    assert p.step_next() == 1
    assert not p.playing
    assert p.step_prev() == 0
    assert p.step_prev() == 0
    p.seek(19)
    assert p.step_next() == 19


def test_out_of_order_data_never_moves_backward(clock):
    text = "\n".join(
        [
            "Time,Lat,Lon,Alt,Speed_kmh,Heading,Sats",
            "2026-01-14 00:00:00,0,0,0,0,0,0",
            "2026-01-14 00:00:05,0,0,0,0,0,0",
            "2026-01-14 00:00:01,0,0,0,0,0,0",
            "2026-01-14 00:00:06,0,0,0,0,0,0",
        ]
    )
    header, records = ingest.parse(text)
    p = TimelinePlayer(Sequence(tuple(header), tuple(records)), clock=clock)
    p.start()
    clock.now = 2.0
    assert p.tick().index == 1
    clock.now = 3.0
    assert p.tick().index == 1


def test_empty_player():
    p = TimelinePlayer()
    with pytest.raises(EmptySequenceError):
        p.start()
    with pytest.raises(EmptySequenceError):
        p.seek(0)
    out = p.tick()
    assert out.index == 0 and not out.advanced and not out.finished


def test_load_resets_state(clock):
    p = _player(clock)
    p.seek(7)
    p.start()
    header, records = ingest.parse(make_csv(5))
    p.load(Sequence(tuple(header), tuple(records)))
    assert p.index == 0 and not p.playing
