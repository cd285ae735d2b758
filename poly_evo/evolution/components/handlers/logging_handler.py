"""
日誌處理器 - 以 logging 與 tqdm 回報演化進度
"""
import logging
from typing import Optional

from tqdm import tqdm

from .base import EvolutionObserver
from ..population import PopulationData

logger = logging.getLogger(__name__)


class LoggingObserver(EvolutionObserver):
    """每 interval 代輸出一行世代摘要"""

    name = "logging_handler"

    def __init__(self, interval: int = 1, level: int = logging.INFO):
        if interval < 1:
            raise ValueError(f"interval must be >= 1, got {interval}")
        self.interval = interval
        self.level = level

    def population_update(self, data: PopulationData):
        if data.generation_number % self.interval != 0:
            return
        logger.log(
            self.level,
            f"Generation {data.generation_number}: best={data.best_fitness:.6f} "
            f"mean={data.mean_fitness:.6f} std={data.fitness_standard_deviation:.6f} "
            f"elapsed={data.elapsed_time:.1f}s"
        )


class ProgressObserver(EvolutionObserver):
    """
    tqdm 進度條

    total 為預期的世代數；停滯或中止導致提前結束時進度條不會填滿。
    """

    name = "progress_handler"

    def __init__(self, total: Optional[int] = None, desc: str = "Evolution"):
        self.total = total
        self.desc = desc
        self._bar: Optional[tqdm] = None

    def population_update(self, data: PopulationData):
        if data.generation_number == 0 or self._bar is None:
            self.close()
            self._bar = tqdm(total=self.total, desc=self.desc, unit="gen")
        self._bar.update(1)
        self._bar.set_postfix(best=f"{data.best_fitness:.4f}")

    @property
    def generations_seen(self) -> int:
        """目前進度條已記錄的世代數"""
        return self._bar.n if self._bar is not None else 0

    def close(self):
        """關閉進度條 (之後 generations_seen 為 0)"""
        if self._bar is not None:
            self._bar.close()
            self._bar = None
