"""
Parallel Fitness Evaluator

This module implements the fork-join evaluation step of a generation:
every candidate is scored, optionally across a bounded thread pool, and
the caller gets the scores back in population order once all of them are
available.
"""

import concurrent.futures
import os
from typing import Any, Callable, List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class ParallelFitnessEvaluator:
    """
    Parallel fitness evaluator using a thread pool.

    Key Features:
    - Pool size defaults to the available hardware concurrency
    - Results are returned in the same order as the population
    - Small populations are evaluated sequentially

    Thread Safety:
    - Threads share the run's fitness cache, which is why a thread pool
      is used instead of worker processes
    - Evaluation functions must not depend on shared mutable state

    Error Handling:
    - Errors raised by the evaluation function are not replaced with a
      default score; the first failure (in population order) is re-raised
      after all submitted work has finished
    """

    def __init__(self,
                 n_workers: Optional[int] = None,
                 enable_parallel: bool = True,
                 min_population_for_parallel: int = 2):
        """
        Initialize parallel fitness evaluator.

        Args:
            n_workers: Number of worker threads (default: CPU count)
            enable_parallel: Enable parallel evaluation
            min_population_for_parallel: Minimum population size to use parallel
        """
        if n_workers is None:
            n_workers = os.cpu_count() or 1
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")

        self.n_workers = n_workers
        self.enable_parallel = enable_parallel
        self.min_population_for_parallel = min_population_for_parallel

        logger.debug(f"ParallelFitnessEvaluator initialized with {n_workers} workers")

    @property
    def is_parallel(self) -> bool:
        return self.enable_parallel and self.n_workers > 1

    def evaluate_population(self,
                            population: Sequence[Any],
                            evaluation_func: Callable[[Any], float]) -> List[float]:
        """
        Evaluate fitness for an entire population.

        Args:
            population: Candidates to score
            evaluation_func: Function taking one candidate and returning its fitness

        Returns:
            List of fitness values (same order as population)

        Example:
            evaluator = ParallelFitnessEvaluator(n_workers=8)
            scores = evaluator.evaluate_population(candidates, cache.evaluate)
        """
        if not self.is_parallel or len(population) < self.min_population_for_parallel:
            return self._evaluate_sequential(population, evaluation_func)
        return self._evaluate_parallel(population, evaluation_func)

    def _evaluate_sequential(self,
                             population: Sequence[Any],
                             evaluation_func: Callable[[Any], float]) -> List[float]:
        """Sequential evaluation"""
        return [float(evaluation_func(candidate)) for candidate in population]

    def _evaluate_parallel(self,
                           population: Sequence[Any],
                           evaluation_func: Callable[[Any], float]) -> List[float]:
        """
        Parallel evaluation using a thread pool.

        Implementation Notes:
        - Leaving the executor context waits for every submitted task,
          which is the synchronization barrier of the generation
        - Futures are read in submission order so results align with
          the population
        """
        workers = min(self.n_workers, len(population))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers,
                                                   thread_name_prefix="fitness") as executor:
            futures = [executor.submit(evaluation_func, candidate) for candidate in population]
            concurrent.futures.wait(futures)

        return [float(future.result()) for future in futures]
