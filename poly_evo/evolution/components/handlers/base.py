"""
觀察者基類

定義演化過程中每一代結束時的回呼接口。
"""

from abc import ABC, abstractmethod

from ..population import PopulationData

class EvolutionObserver(ABC):
    """
    觀察者基類

    引擎在每一代評估完成後，依註冊順序同步呼叫 population_update。
    回呼在執行演化的執行緒上執行；若呼叫端的狀態 (例如 UI) 不是執行緒安全的，
    應由觀察者自行把快照轉交回呼叫端的執行緒 (參見 QueueObserver)。
    """

    name = "base_observer"

    @abstractmethod
    def population_update(self, data: PopulationData):
        """
        世代完成事件

        Args:
            data: 唯讀的世代快照
        """
