"""
佇列處理器 - 把世代快照轉交給呼叫端的執行緒
"""
import logging
import queue
from typing import List, Optional

from .base import EvolutionObserver
from ..population import PopulationData

logger = logging.getLogger(__name__)


class QueueObserver(EvolutionObserver):
    """
    Puts every snapshot on a queue.Queue.

    The run's worker thread only enqueues; the caller drains the queue on
    its own thread (for example from a UI timer), so caller state is never
    touched from the worker.
    """

    name = "queue_handler"

    def __init__(self, maxsize: int = 0, latest_only: bool = False):
        """
        Args:
            maxsize: Queue capacity (0 = unbounded)
            latest_only: Drop older snapshots when the queue is full instead of blocking
        """
        self.queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self.latest_only = latest_only

    def population_update(self, data: PopulationData):
        if not self.latest_only:
            self.queue.put(data)
            return
        while True:
            try:
                self.queue.put_nowait(data)
                return
            except queue.Full:
                try:
                    self.queue.get_nowait()
                except queue.Empty:
                    pass

    def drain(self) -> List[PopulationData]:
        """取出目前所有快照 (不阻塞)"""
        updates = []
        while True:
            try:
                updates.append(self.queue.get_nowait())
            except queue.Empty:
                return updates

    def latest(self) -> Optional[PopulationData]:
        """最新的快照，沒有則回傳 None"""
        updates = self.drain()
        return updates[-1] if updates else None
