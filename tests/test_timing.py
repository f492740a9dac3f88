import time

from codexion.timing import now_ms, now_us, precise_sleep


def test_now_ms_tracks_wall_clock():
    before = time.time_ns() // 1_000_000
    value = now_ms()
    after = time.time_ns() // 1_000_000
    assert before <= value <= after


def test_now_us_tracks_wall_clock():
    before = time.time_ns() // 1_000
    value = now_us()
    after = time.time_ns() // 1_000
    assert before <= value <= after


def test_now_ms_and_now_us_agree():
    ms = now_ms()
    us = now_us()
    assert us // 1000 >= ms


def test_now_ms_is_monotonic_over_short_span():
    first = now_ms()
    time.sleep(0.002)
    second = now_ms()
    assert second >= first


def test_precise_sleep_full_duration():
    start = time.monotonic()
    completed = precise_sleep(20, lambda: False)
    elapsed_ms = (time.monotonic() - start) * 1000
    assert completed is True
    assert elapsed_ms >= 19


def test_precise_sleep_zero_returns_immediately():
    calls = []
    completed = precise_sleep(0, lambda: calls.append(1) or False)
    assert completed is True
    assert calls == []


def test_precise_sleep_stops_when_asked():
    start = time.monotonic()
    completed = precise_sleep(5000, lambda: True)
    elapsed = time.monotonic() - start
    assert completed is False
    assert elapsed < 1


def test_precise_sleep_stops_after_flag_flips():
    deadline = time.monotonic() + 0.01
    start = time.monotonic()
    completed = precise_sleep(5000, lambda: time.monotonic() >= deadline)
    elapsed = time.monotonic() - start
    assert completed is False
    assert elapsed < 3