"""
變異策略模組

MutationStrategy 以固定機率對每個候選解獨立決定是否變異；
ListOperator 把一個算子套用到序列型候選解內部的元素上。
"""

from typing import Any
import logging
import random

from .operation import EvolutionaryOperator
from .crossover import _same_type
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

class MutationStrategy(EvolutionaryOperator):
    """
    變異策略基類

    子類實現 mutate，回傳新的候選解；未被選中變異的候選解原樣保留。
    """

    name = "mutation_strategy"

    def __init__(self, mutation_probability: float):
        """
        初始化變異策略

        Args:
            mutation_probability: 每個候選解被變異的機率
        """
        if not 0.0 <= mutation_probability <= 1.0:
            raise ConfigurationError(f"mutation_probability must be in [0, 1], got {mutation_probability}")
        self.mutation_probability = mutation_probability

    def apply(self, candidates, rng):
        """
        執行變異操作
        """
        return [
            self.mutate(candidate, rng) if rng.random() < self.mutation_probability else candidate
            for candidate in candidates
        ]

    def mutate(self, candidate: Any, rng: random.Random) -> Any:
        """
        變異單個候選解

        Args:
            candidate: 原候選解 (不可修改)
            rng: 隨機數產生器

        Returns:
            新的候選解
        """
        raise NotImplementedError("子類必須實現 mutate 方法")

class ListOperator(EvolutionaryOperator):
    """
    元素級算子

    將序列型候選解的元素視為一個「族群」，交給 delegate 處理。
    例如 delegate 為多邊形顏色變異時，每個多邊形都有機會被變異。
    """

    name = "list_operator"

    def __init__(self, delegate: EvolutionaryOperator):
        self.delegate = delegate

    def apply(self, candidates, rng):
        return [_same_type(candidate, self.delegate.apply(list(candidate), rng)) for candidate in candidates]
