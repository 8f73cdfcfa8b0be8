"""Tests for request pacing."""

import pytest

from wksync.wanikani.limiter import RateLimiter


class FakeClock:

    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class TestRateLimiter:

    def test_first_call_runs_immediately(self):
        clock = FakeClock()
        limiter = RateLimiter(1.1, clock=clock, sleep=clock.sleep)

        assert limiter.schedule(lambda: "done") == "done"
        assert clock.sleeps == []

    def test_back_to_back_calls_are_spaced(self):
        clock = FakeClock()
        limiter = RateLimiter(1.1, clock=clock, sleep=clock.sleep)
        starts = []

        for _ in range(3):
            limiter.schedule(lambda: starts.append(clock.now))

        assert starts == pytest.approx([100.0, 101.1, 102.2])

    def test_slow_call_needs_no_extra_wait(self):
        clock = FakeClock()
        limiter = RateLimiter(1.1, clock=clock, sleep=clock.sleep)

        def slow():
            clock.now += 5.0

        limiter.schedule(slow)
        limiter.schedule(lambda: None)

        assert clock.sleeps == []

    def test_partial_wait(self):
        clock = FakeClock()
        limiter = RateLimiter(1.1, clock=clock, sleep=clock.sleep)

        limiter.schedule(lambda: None)
        clock.now += 0.5
        limiter.schedule(lambda: None)

        assert clock.sleeps == [pytest.approx(0.6)]

    def test_passes_arguments_and_propagates_errors(self):
        clock = FakeClock()
        limiter = RateLimiter(0.0, clock=clock, sleep=clock.sleep)

        assert limiter.schedule(lambda a, b=0: a + b, 1, b=2) == 3

        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            limiter.schedule(boom)
        # the slot is released after a failure
        assert limiter.schedule(lambda: "again") == "again"
