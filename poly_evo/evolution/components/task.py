"""
背景演化任務

在獨立的工作執行緒上執行 evolve，呼叫端只透過兩種方式與之互動：
(a) 設置中止旗標，(b) 從佇列接收世代快照。
中止是合作式的，引擎在下一個世代邊界檢查旗標，不會強制中斷執行緒。
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Iterable, List, Optional
import logging
import threading

from .engine import EvolutionEngine
from .handlers.queue_handler import QueueObserver
from .population import PopulationData
from .termination import Abort, TerminationCondition

logger = logging.getLogger(__name__)


class AbortControl:
    """
    中止控制

    擁有一個 threading.Event 及對應的 Abort 終止條件。
    signal_abort 可重複呼叫 (只有第一次有效)；reset 讓同一個控制可用於之後的另一次執行。
    同一時間只能附加在一個正在執行的任務上。
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._owner: Optional[object] = None
        self.termination_condition = Abort(self._event)

    @property
    def is_aborted(self) -> bool:
        return self._event.is_set()

    def signal_abort(self):
        """要求演化在下一個世代邊界停止"""
        if not self._event.is_set():
            self._event.set()
            logger.info("收到停止信號")

    def reset(self):
        """
        清除中止旗標

        Raises:
            RuntimeError: 如果仍有任務正在使用此控制
        """
        with self._lock:
            if self._owner is not None:
                raise RuntimeError("Cannot reset an AbortControl while a run is using it")
            self._event.clear()

    def attach(self, owner: object):
        """標記此控制正被 owner 使用"""
        with self._lock:
            if self._owner is not None and self._owner is not owner:
                raise RuntimeError("AbortControl is already in use by another running task")
            self._owner = owner

    def detach(self, owner: object):
        with self._lock:
            if self._owner is owner:
                self._owner = None


class EvolutionTask:
    """
    背景演化任務

    Example:
        >>> task = EvolutionTask(engine, 50, 3, Stagnation(1000))
        >>> future = task.start()
        >>> while not task.done():
        ...     for data in task.poll_updates():
        ...         show(data.best_candidate)
        >>> best = task.result()
    """

    def __init__(self,
                 engine: EvolutionEngine,
                 population_size: int,
                 elite_count: int,
                 *termination_conditions: TerminationCondition,
                 abort_control: Optional[AbortControl] = None,
                 seed_candidates: Optional[Iterable[Any]] = None,
                 latest_only: bool = False):
        """
        Args:
            engine: 要執行的引擎
            population_size: 族群大小
            elite_count: 菁英數量
            *termination_conditions: 終止條件 (任務會自動加上中止條件)
            abort_control: 可選的中止控制，預設為新的實例
            seed_candidates: 可選的種子候選解
            latest_only: 佇列只保留最新的快照
        """
        self.engine = engine
        self.population_size = population_size
        self.elite_count = elite_count
        self.termination_conditions = list(termination_conditions)
        self.abort_control = abort_control if abort_control is not None else AbortControl()
        self.seed_candidates = list(seed_candidates or [])
        self.observer = QueueObserver(maxsize=1 if latest_only else 0, latest_only=latest_only)
        self._future: Optional[Future] = None

    def start(self) -> Future:
        """
        在背景執行緒上開始演化

        Returns:
            完成時帶有最佳候選解的 Future
        """
        if self._future is not None:
            raise RuntimeError("EvolutionTask has already been started")

        self.abort_control.attach(self)
        self.engine.add_observer(self.observer)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="evolution")
        try:
            self._future = executor.submit(self._run)
        except Exception:
            self.engine.remove_observer(self.observer)
            self.abort_control.detach(self)
            raise
        finally:
            executor.shutdown(wait=False)
        return self._future

    def _run(self) -> Any:
        conditions = self.termination_conditions + [self.abort_control.termination_condition]
        try:
            return self.engine.evolve(self.population_size, self.elite_count, *conditions,
                                      seed_candidates=self.seed_candidates)
        finally:
            self.engine.remove_observer(self.observer)
            self.abort_control.detach(self)

    def abort(self):
        """合作式中止：目前的評估會完成，之後回傳目前最佳解"""
        self.abort_control.signal_abort()

    def poll_updates(self) -> List[PopulationData]:
        """在呼叫端執行緒上取出所有待處理的快照"""
        return self.observer.drain()

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None) -> Any:
        """
        等待並回傳最佳候選解

        Raises:
            RuntimeError: 如果任務尚未開始
            EvolutionError / ConfigurationError: 執行失敗時原樣拋出
        """
        if self._future is None:
            raise RuntimeError("EvolutionTask has not been started")
        return self._future.result(timeout=timeout)

    @property
    def future(self) -> Optional[Future]:
        return self._future
