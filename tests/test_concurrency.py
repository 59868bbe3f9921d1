"""gather_all: ordered results, concurrent execution, first error fails the batch."""

import threading
import time

import pytest

from news_canvas.application.concurrency import gather_all


def test_results_keep_submission_order():
    def delayed(value, seconds):
        def call():
            time.sleep(seconds)
            return value
        return call

    assert gather_all([delayed("a", 0.05), delayed("b", 0.0), delayed("c", 0.02)]) == ["a", "b", "c"]


def test_calls_run_concurrently():
    barrier = threading.Barrier(3, timeout=5)

    def call():
        # Deadlocks (and times out) unless all three run at once
        barrier.wait()
        return True

    assert gather_all([call, call, call]) == [True, True, True]


def test_first_failure_fails_the_batch():
    def ok():
        return 1

    def broken():
        raise ValueError("item failed")

    with pytest.raises(ValueError, match="item failed"):
        gather_all([ok, broken, ok])


def test_empty_and_single_batches():
    assert gather_all([]) == []
    assert gather_all([lambda: 7]) == [7]
