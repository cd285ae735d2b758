"""
初始化策略模組

候選解工廠負責產生初始族群。具體的基因型由領域插件決定，
引擎只依賴此處定義的接口。
"""

from abc import abstractmethod
from typing import Any, Iterable, List, Optional
import logging
import random

from .base import EvolutionStrategy
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

class CandidateFactory(EvolutionStrategy):
    """
    候選解工廠基類

    子類只需實現 generate_random_candidate；工廠的約束條件
    (例如畫布大小、多邊形數量上限) 屬於工廠本身的狀態。
    """

    name = "candidate_factory"

    @abstractmethod
    def generate_random_candidate(self, rng: random.Random) -> Any:
        """
        創建單個隨機候選解

        Args:
            rng: 隨機數產生器

        Returns:
            新的候選解 (不可變的值)
        """

    def generate_initial_population(self,
                                    population_size: int,
                                    rng: random.Random,
                                    seed_candidates: Optional[Iterable[Any]] = None) -> List[Any]:
        """
        初始化族群

        種子候選解會放在族群最前面，其餘位置以隨機候選解補滿。

        Args:
            population_size: 族群大小
            rng: 隨機數產生器
            seed_candidates: 可選的種子候選解

        Returns:
            長度為 population_size 的候選解列表

        Raises:
            ConfigurationError: 如果種子數量超過族群大小
        """
        seeds = list(seed_candidates or [])
        if len(seeds) > population_size:
            raise ConfigurationError(
                f"Too many seed candidates for population size: {len(seeds)} > {population_size}"
            )

        population = seeds + [self.generate_random_candidate(rng) for _ in range(population_size - len(seeds))]
        logger.debug(f"初始族群: {len(seeds)} 個種子 + {population_size - len(seeds)} 個隨機個體")
        return population
