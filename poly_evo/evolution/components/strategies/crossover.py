"""
交配策略模組

實現序列型基因的多點交配。候選解為 tuple 或 list，
子代保持與父代相同的容器類型。
"""

from typing import Any, List, Sequence, Tuple
import logging
import random

from .operation import EvolutionaryOperator
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

class CrossoverStrategy(EvolutionaryOperator):
    """
    交配策略基類

    族群打亂後兩兩配對，每一對以 crossover_probability 的機率交配，
    否則原樣保留。奇數個體時最後一個直接保留。
    """

    name = "crossover_strategy"

    def __init__(self, crossover_probability: float = 1.0):
        """
        初始化交配策略

        Args:
            crossover_probability: 每對父母交配的機率
        """
        if not 0.0 <= crossover_probability <= 1.0:
            raise ConfigurationError(f"crossover_probability must be in [0, 1], got {crossover_probability}")
        self.crossover_probability = crossover_probability

    def apply(self, candidates, rng):
        """
        執行交配操作
        """
        shuffled = list(candidates)
        rng.shuffle(shuffled)

        offspring = []
        for i in range(0, len(shuffled) - 1, 2):
            parent1, parent2 = shuffled[i], shuffled[i + 1]
            if rng.random() < self.crossover_probability:
                offspring.extend(self.mate(parent1, parent2, rng))
            else:
                offspring.extend([parent1, parent2])

        if len(shuffled) % 2 == 1:
            offspring.append(shuffled[-1])
        return offspring

    def mate(self, parent1: Any, parent2: Any, rng: random.Random) -> Tuple[Any, Any]:
        """
        產生兩個子代

        Args:
            parent1: 父代 1
            parent2: 父代 2
            rng: 隨機數產生器

        Returns:
            (child1, child2)
        """
        raise NotImplementedError("子類必須實現 mate 方法")

class ListCrossover(CrossoverStrategy):
    """
    序列多點交配

    每個交配點在兩個父代的共同長度內隨機選取，交換交配點之前的片段。
    長度不同的父代也可以交配，子代長度隨之改變。
    """

    name = "list_crossover"

    def __init__(self, crossover_points: int = 1, crossover_probability: float = 1.0):
        """
        Args:
            crossover_points: 交配點數量
            crossover_probability: 每對父母交配的機率
        """
        super().__init__(crossover_probability)
        if crossover_points < 1:
            raise ConfigurationError(f"crossover_points must be >= 1, got {crossover_points}")
        self.crossover_points = crossover_points

    def mate(self, parent1, parent2, rng):
        child1: List = list(parent1)
        child2: List = list(parent2)
        for _ in range(self.crossover_points):
            common = min(len(child1), len(child2))
            if common > 1:
                point = rng.randint(1, common - 1)
                child1[:point], child2[:point] = child2[:point], child1[:point]
        return _same_type(parent1, child1), _same_type(parent2, child2)


def _same_type(template: Sequence, items: List) -> Sequence:
    """Rebuild items in the container type of template (tuple stays tuple)."""
    if isinstance(template, tuple):
        return tuple(items)
    return items
