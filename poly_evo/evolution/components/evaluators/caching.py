"""
快取適應度評估器

包裝另一個評估器，依候選解的「值」記憶評估結果。
候選解是不可變的，因此相同的值永遠得到相同的分數；
變異產生的新候選解是新的值，自然不會命中舊的快取。
"""

from concurrent.futures import Future
from typing import Any, Dict
import logging
import threading

from .base import FitnessEvaluator

logger = logging.getLogger(__name__)

class CachingFitnessEvaluator(FitnessEvaluator):
    """
    Memoizing wrapper around a FitnessEvaluator.

    Thread Safety:
    - The table is guarded by a lock
    - Each key has a single in-flight Future, so concurrent requests for
      the same candidate wait for one computation instead of repeating it
    - A failed computation is not cached; every waiter sees the exception

    Candidates must be hashable. Entries are never evicted; the engine
    builds a fresh cache for each run.
    """

    name = "caching_evaluator"

    def __init__(self, delegate: FitnessEvaluator):
        self.delegate = delegate
        self._lock = threading.Lock()
        self._entries: Dict[Any, Future] = {}
        self.hits = 0
        self.misses = 0

    @property
    def is_natural(self) -> bool:
        return self.delegate.is_natural

    def evaluate(self, candidate: Any) -> float:
        with self._lock:
            entry = self._entries.get(candidate)
            if entry is not None:
                self.hits += 1
                owner = False
            else:
                entry = Future()
                self._entries[candidate] = entry
                self.misses += 1
                owner = True

        if not owner:
            return entry.result()

        try:
            fitness = self.delegate.evaluate(candidate)
        except BaseException as e:
            with self._lock:
                self._entries.pop(candidate, None)
            entry.set_exception(e)
            raise
        entry.set_result(fitness)
        return fitness

    def clear(self):
        """清除所有快取"""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
