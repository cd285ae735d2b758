"""
Tests for ParallelFitnessEvaluator
"""
import threading
import time

import pytest

from poly_evo.parallel import ParallelFitnessEvaluator


def slow_length(candidate):
    time.sleep(0.01)
    return len(candidate)


class TestParallelFitnessEvaluator:

    def test_results_in_population_order(self):
        evaluator = ParallelFitnessEvaluator(n_workers=4)
        population = ["a" * n for n in range(20)]

        assert evaluator.evaluate_population(population, slow_length) == [float(n) for n in range(20)]

    def test_uses_worker_threads(self):
        evaluator = ParallelFitnessEvaluator(n_workers=4)
        names = set()

        def record(candidate):
            names.add(threading.current_thread().name)
            time.sleep(0.02)
            return 0.0

        evaluator.evaluate_population(list(range(8)), record)
        assert all(name.startswith("fitness") for name in names)

    def test_sequential_when_disabled(self):
        evaluator = ParallelFitnessEvaluator(n_workers=4, enable_parallel=False)
        names = set()

        def record(candidate):
            names.add(threading.current_thread().name)
            return 1.0

        assert evaluator.evaluate_population([1, 2, 3], record) == [1.0, 1.0, 1.0]
        assert names == {threading.current_thread().name}
        assert evaluator.is_parallel is False

    def test_sequential_for_small_population(self):
        evaluator = ParallelFitnessEvaluator(n_workers=4, min_population_for_parallel=10)
        names = set()

        def record(candidate):
            names.add(threading.current_thread().name)
            return 1.0

        evaluator.evaluate_population([1, 2, 3], record)
        assert names == {threading.current_thread().name}

    def test_error_propagates_after_barrier(self):
        evaluator = ParallelFitnessEvaluator(n_workers=3)
        finished = []

        def evaluate(candidate):
            if candidate == 2:
                raise ValueError("bad candidate")
            time.sleep(0.02)
            finished.append(candidate)
            return 1.0

        with pytest.raises(ValueError, match="bad candidate"):
            evaluator.evaluate_population([0, 1, 2, 3, 4], evaluate)
        assert sorted(finished) == [0, 1, 3, 4]

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            ParallelFitnessEvaluator(n_workers=0)

    def test_default_worker_count(self):
        assert ParallelFitnessEvaluator().n_workers >= 1
