"""UI-only progress ticker."""

import random

from news_canvas.presentation.progress import ProgressTicker


class MaxRandom(random.Random):
    def random(self):
        return 0.999


def test_advance_never_passes_the_ceiling():
    ticker = ProgressTicker(rng=random.Random(7))
    values = [ticker.advance() for _ in range(500)]

    assert max(values) <= 95.0
    assert values == sorted(values)
    assert values[-1] == 95.0


def test_steps_slow_down_after_eighty_percent():
    ticker = ProgressTicker(rng=MaxRandom())
    ticker.value = 10.0
    assert ticker.advance() - 10.0 > 2.9

    ticker.value = 85.0
    step = ticker.advance() - 85.0
    assert 0.9 < step < 1.0


def test_complete_snaps_to_full_and_reports_it():
    seen = []
    ticker = ProgressTicker(on_tick=seen.append, interval=10)
    ticker.start()

    ticker.complete()

    assert not ticker.running
    assert ticker.value == 100.0
    assert seen[-1] == 100.0


def test_reset_stops_and_zeroes():
    ticker = ProgressTicker(interval=10)
    ticker.start()
    ticker.value = 42.0

    ticker.reset()

    assert not ticker.running
    assert ticker.value == 0.0
