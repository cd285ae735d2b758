"""
演化策略基類

定義所有可插拔策略（選擇、變異、交配、管線）的共同部分。
"""

from abc import ABC
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)

class EvolutionStrategy(ABC):
    """
    演化策略基類

    所有策略都帶有一個名稱，並可回報其參數，方便日誌記錄。
    策略在建立後不應再被修改，一次 evolve 呼叫期間的設定是不可變的。
    """

    name = "base_strategy"

    def describe(self) -> Dict[str, Any]:
        """Public, non-callable attributes of the strategy."""
        params = {k: v for k, v in vars(self).items() if not k.startswith('_') and not callable(v)}
        return {'name': self.name, **params}

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.describe().items() if k != 'name')
        return f"{self.__class__.__name__}({params})"
