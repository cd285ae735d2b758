"""
適應度評估器基類

定義演化計算中適應度評估的統一接口。
"""

from abc import ABC, abstractmethod
from typing import Any
import logging

logger = logging.getLogger(__name__)

class FitnessEvaluator(ABC):
    """
    適應度評估器基類

    所有適應度評估器都必須繼承此類並實現 evaluate。
    評估器必須宣告優化方向：is_natural 為 True 表示適應度越高越好，
    False 表示越低越好 (例如誤差)。
    """

    name = "base_evaluator"

    @property
    @abstractmethod
    def is_natural(self) -> bool:
        """True 表示適應度越高越好"""

    @abstractmethod
    def evaluate(self, candidate: Any) -> float:
        """
        評估單個候選解的適應度

        可能會在多個執行緒中同時被呼叫，實作不可依賴共享的可變狀態。

        Args:
            candidate: 要評估的候選解

        Returns:
            適應度值
        """
