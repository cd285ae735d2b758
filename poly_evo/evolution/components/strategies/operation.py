"""
操作策略模組

定義演化算子的接口，以及組合算子的兩種模式：
- 串聯 (EvolutionPipeline)：候選解依序通過每個算子
- 並聯 (SplitEvolution)：候選解按比例分給兩個算子

組合後的結果本身也是一個算子，可以任意巢狀。
"""

from abc import abstractmethod
from typing import Any, List, Sequence
import logging
import random

from .base import EvolutionStrategy
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

class EvolutionaryOperator(EvolutionStrategy):
    """
    演化算子基類

    算子是純函數：輸入候選解列表，回傳新的候選解列表，
    不修改輸入的任何候選解。
    """

    name = "operator"

    @abstractmethod
    def apply(self, candidates: Sequence[Any], rng: random.Random) -> List[Any]:
        """
        執行演化操作

        Args:
            candidates: 被選中的父代候選解
            rng: 隨機數產生器

        Returns:
            子代候選解列表
        """

class EvolutionPipeline(EvolutionaryOperator):
    """
    串聯操作策略

    候選解依序通過每個算子，前一個算子的輸出即為下一個的輸入。
    """

    name = "pipeline"

    def __init__(self, operators: Sequence[EvolutionaryOperator]):
        if not operators:
            raise ConfigurationError("Pipeline must contain at least one operator")
        self.operators = list(operators)

    def apply(self, candidates, rng):
        population = list(candidates)
        for operator in self.operators:
            population = operator.apply(population, rng)
        return population

class SplitEvolution(EvolutionaryOperator):
    """
    並聯操作策略

    族群打亂後，前 ratio 比例交給 first，其餘交給 second，
    兩者的輸出再合併。
    """

    name = "split"

    def __init__(self, first: EvolutionaryOperator, second: EvolutionaryOperator, ratio: float = 0.5):
        if not 0.0 <= ratio <= 1.0:
            raise ConfigurationError(f"ratio must be in [0, 1], got {ratio}")
        self.first = first
        self.second = second
        self.ratio = ratio

    def apply(self, candidates, rng):
        shuffled = list(candidates)
        rng.shuffle(shuffled)
        split_at = round(len(shuffled) * self.ratio)
        return self.first.apply(shuffled[:split_at], rng) + self.second.apply(shuffled[split_at:], rng)

class IdentityOperator(EvolutionaryOperator):
    """原樣回傳候選解 (保留操作)"""

    name = "identity"

    def apply(self, candidates, rng):
        return list(candidates)
