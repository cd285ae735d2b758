"""
Tests for CachingFitnessEvaluator
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from poly_evo.evolution.components.evaluators import CachingFitnessEvaluator, FitnessEvaluator

from conftest import OneMaxEvaluator


class SlowEvaluator(FitnessEvaluator):
    is_natural = False

    def __init__(self, delay=0.05):
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def evaluate(self, candidate):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return float(len(candidate))


class FlakyEvaluator(FitnessEvaluator):
    is_natural = True

    def __init__(self):
        self.calls = 0

    def evaluate(self, candidate):
        self.calls += 1
        if self.calls == 1:
            raise ValueError("transient")
        return 2.0


class TestCachingFitnessEvaluator:

    def test_same_value_evaluated_once(self):
        delegate = OneMaxEvaluator()
        cache = CachingFitnessEvaluator(delegate)

        assert cache.evaluate((1, 0, 1)) == 2.0
        assert cache.evaluate((1, 0, 1)) == 2.0
        assert cache.evaluate((0, 0, 1)) == 1.0

        assert delegate.calls == 2
        assert cache.hits == 1
        assert cache.misses == 2
        assert len(cache) == 2

    def test_direction_follows_delegate(self):
        assert CachingFitnessEvaluator(OneMaxEvaluator(natural=False)).is_natural is False
        assert CachingFitnessEvaluator(OneMaxEvaluator(natural=True)).is_natural is True

    def test_concurrent_requests_compute_once(self):
        delegate = SlowEvaluator()
        cache = CachingFitnessEvaluator(delegate)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(cache.evaluate, [("a", "b")] * 16))

        assert results == [2.0] * 16
        assert delegate.calls == 1

    def test_failure_is_not_cached(self):
        delegate = FlakyEvaluator()
        cache = CachingFitnessEvaluator(delegate)

        with pytest.raises(ValueError):
            cache.evaluate((1,))
        assert len(cache) == 0

        assert cache.evaluate((1,)) == 2.0
        assert delegate.calls == 2

    def test_clear(self):
        delegate = OneMaxEvaluator()
        cache = CachingFitnessEvaluator(delegate)
        cache.evaluate((1, 1))
        cache.clear()

        assert len(cache) == 0
        assert cache.hits == 0
        cache.evaluate((1, 1))
        assert delegate.calls == 2
