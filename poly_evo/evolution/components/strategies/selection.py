"""
選擇策略模組

實現父代選擇策略 (二元機率錦標賽)。
策略只使用傳入的隨機數產生器，給定相同種子時結果可重現。
"""

from typing import List, Sequence
import logging
import random

from .base import EvolutionStrategy
from ..errors import ConfigurationError
from ..individual import EvaluatedCandidate

logger = logging.getLogger(__name__)

class SelectionStrategy(EvolutionStrategy):
    """
    選擇策略基類
    """

    name = "selection_strategy"

    def select(self,
               population: Sequence[EvaluatedCandidate],
               natural_fitness: bool,
               selection_size: int,
               rng: random.Random) -> List:
        """
        選擇個體

        Args:
            population: 已排序的族群 (rank 0 在最前)
            natural_fitness: True 表示適應度越高越好
            selection_size: 選擇個體數量 (可重複選擇)
            rng: 隨機數產生器

        Returns:
            選中的候選解列表
        """
        raise NotImplementedError("子類必須實現 select 方法")

class TournamentSelection(SelectionStrategy):
    """
    二元錦標賽選擇策略

    每次隨機抽取兩個個體，以機率 p 選擇較優者，否則選擇較差者。
    p = 0.5 時等同於均勻隨機選擇，p = 1.0 時永遠選擇較優者。
    """

    name = "tournament"

    def __init__(self, selection_probability: float = 0.8):
        """
        初始化錦標賽選擇策略

        Args:
            selection_probability: 選擇較優個體的機率，必須介於 0.5 與 1.0 之間

        Raises:
            ConfigurationError: 如果機率不在範圍內
        """
        if not 0.5 <= selection_probability <= 1.0:
            raise ConfigurationError(
                f"selection_probability must be in [0.5, 1.0], got {selection_probability}"
            )
        self.selection_probability = selection_probability

    def select(self, population, natural_fitness, selection_size, rng):
        """
        使用錦標賽選擇個體
        """
        if not population or selection_size <= 0:
            return []

        size = len(population)
        selected = []
        for _ in range(selection_size):
            first = population[rng.randrange(size)]
            second = population[rng.randrange(size)]
            select_fitter = rng.random() < self.selection_probability
            if select_fitter:
                winner = first if first.is_fitter_than(second, natural_fitness) else second
            else:
                winner = second if first.is_fitter_than(second, natural_fitness) else first
            selected.append(winner.candidate)
        return selected
