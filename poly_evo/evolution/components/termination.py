"""
終止條件模組

每個終止條件根據世代快照 (PopulationData) 判斷是否應停止演化。
引擎每一代都會評估所有條件，任何一個成立即停止 (邏輯 OR)。
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging
import threading

from .errors import ConfigurationError
from .population import PopulationData

logger = logging.getLogger(__name__)

class TerminationCondition(ABC):
    """
    終止條件基類
    """

    name = "termination_condition"

    @abstractmethod
    def should_terminate(self, population_data: PopulationData) -> bool:
        """
        Args:
            population_data: 當前世代快照

        Returns:
            True 表示應該停止演化
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

class GenerationCount(TerminationCondition):
    """執行固定數量的世代後停止 (generation_count=1 只評估初始族群)"""

    name = "generation_count"

    def __init__(self, generation_count: int):
        if generation_count < 1:
            raise ConfigurationError(f"generation_count must be >= 1, got {generation_count}")
        self.generation_count = generation_count

    def should_terminate(self, population_data):
        return population_data.generation_number + 1 >= self.generation_count

    def __repr__(self) -> str:
        return f"GenerationCount({self.generation_count})"

class ElapsedTime(TerminationCondition):
    """經過指定秒數後停止 (於世代邊界檢查)"""

    name = "elapsed_time"

    def __init__(self, max_duration: float):
        if max_duration <= 0:
            raise ConfigurationError(f"max_duration must be > 0, got {max_duration}")
        self.max_duration = max_duration

    def should_terminate(self, population_data):
        return population_data.elapsed_time >= self.max_duration

    def __repr__(self) -> str:
        return f"ElapsedTime({self.max_duration}s)"

class TargetFitness(TerminationCondition):
    """
    最佳個體達到目標適應度時停止

    natural_fitness 必須與評估器一致 (引擎在開始前檢查)：
    True 時 best >= target，False 時 best <= target。
    """

    name = "target_fitness"

    def __init__(self, target_fitness: float, natural_fitness: bool):
        self.target_fitness = target_fitness
        self.natural_fitness = natural_fitness

    def should_terminate(self, population_data):
        if self.natural_fitness:
            return population_data.best_fitness >= self.target_fitness
        return population_data.best_fitness <= self.target_fitness

    def __repr__(self) -> str:
        return f"TargetFitness({self.target_fitness}, natural={self.natural_fitness})"

class Stagnation(TerminationCondition):
    """
    停滯終止條件

    第 0 代建立基準；之後若連續 generation_limit 代都沒有嚴格改進
    (改進方向依快照的 natural_fitness)，則停止。
    因此從未改進時，會在 generation_number == generation_limit 時觸發。

    use_population_average 為 True 時追蹤族群平均適應度而非最佳適應度。
    """

    name = "stagnation"

    def __init__(self, generation_limit: int, use_population_average: bool = False):
        if generation_limit < 1:
            raise ConfigurationError(f"generation_limit must be >= 1, got {generation_limit}")
        self.generation_limit = generation_limit
        self.use_population_average = use_population_average
        self._best: Optional[float] = None
        self._stagnant_generations = 0

    def should_terminate(self, population_data):
        fitness = (population_data.mean_fitness if self.use_population_average
                   else population_data.best_fitness)

        if population_data.generation_number == 0 or self._best is None:
            # 新的一次 evolve 從第 0 代開始，重新建立基準
            self._best = fitness
            self._stagnant_generations = 0
            return False

        improved = fitness > self._best if population_data.natural_fitness else fitness < self._best
        if improved:
            self._best = fitness
            self._stagnant_generations = 0
            return False

        self._stagnant_generations += 1
        if self._stagnant_generations >= self.generation_limit:
            logger.info(f"停滯 {self._stagnant_generations} 代，適應度維持 {self._best}")
            return True
        return False

    @property
    def stagnant_generations(self) -> int:
        """目前連續沒有改進的世代數"""
        return self._stagnant_generations

    def __repr__(self) -> str:
        return f"Stagnation({self.generation_limit}, use_population_average={self.use_population_average})"

class Abort(TerminationCondition):
    """
    外部中止條件

    由 AbortControl 擁有的 threading.Event 支撐，讀取不會阻塞。
    """

    name = "abort"

    def __init__(self, event: Optional[threading.Event] = None):
        self._event = event if event is not None else threading.Event()

    @property
    def is_aborted(self) -> bool:
        return self._event.is_set()

    def should_terminate(self, population_data):
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"Abort(aborted={self.is_aborted})"
