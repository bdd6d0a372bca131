import pytest

from flappy_sim.clock import FrameClock

FRAME = 1000.0 / 60


def test_first_tick_has_no_delta():
    clock = FrameClock(60, 100)
    assert clock.tick(1234.0) == 0
    assert clock.previous_ms == 1234.0


def test_one_reference_frame_normalizes_to_one():
    clock = FrameClock(60, 100)
    clock.tick(0)
    assert clock.tick(FRAME) == pytest.approx(1.0)


def test_half_rate_frames_count_double():
    clock = FrameClock(60, 100)
    clock.tick(0)
    assert clock.tick(2 * FRAME) == pytest.approx(2.0)


def test_long_stall_is_clamped():
    clock = FrameClock(60, 100)
    clock.tick(0)
    dt = clock.tick(5000)
    assert clock.delta_ms == 100
    assert dt == pytest.approx(6.0)


def test_previous_timestamp_is_stored_even_when_clamped():
    clock = FrameClock(60, 100)
    clock.tick(0)
    clock.tick(5000)
    assert clock.previous_ms == 5000
    assert clock.tick(5000 + FRAME) == pytest.approx(1.0)


def test_resync_avoids_time_jump():
    clock = FrameClock(60, 100)
    clock.tick(0)
    clock.tick(FRAME)
    clock.resync(60_000)
    assert clock.normalized_delta == 0
    assert clock.tick(60_000 + FRAME) == pytest.approx(1.0)


def test_timestamps_going_backwards_give_zero():
    clock = FrameClock(60, 100)
    clock.tick(500)
    assert clock.tick(400) == 0


def test_time_source_used_when_no_timestamp_given():
    stamps = iter([0.0, 50.0, 1000.0])
    clock = FrameClock(60, 100, time_source=lambda: next(stamps))
    clock.tick()
    assert clock.tick() == pytest.approx(3.0)
    clock.resync()
    assert clock.previous_ms == 1000.0
