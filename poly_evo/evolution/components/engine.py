"""
演化引擎核心類

這個模組實現了組件化演化引擎的核心邏輯，負責協調候選解工廠、
演化算子管線、適應度評估器、選擇策略與觀察者，執行完整的世代循環：

    初始化 → [評估 → 通知觀察者 → 檢查終止 → 菁英保留 + 選擇 + 繁殖] → 終止
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence
import logging
import math
import random
import time
import uuid
from datetime import datetime

from .errors import ConfigurationError, EvolutionError
from .individual import EvaluatedCandidate, sort_evaluated_population
from .population import PopulationData, compute_population_data
from .termination import TerminationCondition, TargetFitness
from .strategies.initialization import CandidateFactory
from .strategies.operation import EvolutionaryOperator
from .strategies.selection import SelectionStrategy
from .evaluators.base import FitnessEvaluator
from .evaluators.caching import CachingFitnessEvaluator
from .handlers.base import EvolutionObserver
from ...parallel.fitness_evaluator import ParallelFitnessEvaluator

logger = logging.getLogger(__name__)

class EvolutionEngine:
    """
    組件化演化引擎

    這個類是演化計算的核心，負責：
    1. 以候選解工廠建立初始族群
    2. 透過快取評估器 (可並行) 評估每一代
    3. 依註冊順序通知觀察者
    4. 檢查終止條件 (任一成立即停止)
    5. 菁英保留，並以選擇策略 + 演化管線補滿下一代

    每次 evolve 呼叫都是一次獨立的執行；同一個引擎不應同時執行兩次 evolve。
    """

    def __init__(self,
                 candidate_factory: CandidateFactory,
                 evolution_scheme: EvolutionaryOperator,
                 fitness_evaluator: FitnessEvaluator,
                 selection_strategy: SelectionStrategy,
                 rng: Optional[random.Random] = None,
                 max_workers: Optional[int] = None,
                 enable_parallel: bool = True,
                 min_population_for_parallel: int = 2,
                 cache_fitness: bool = True):
        """
        初始化演化引擎

        Args:
            candidate_factory: 產生隨機候選解
            evolution_scheme: 演化算子 (通常是 EvolutionPipeline)
            fitness_evaluator: 適應度評估器
            selection_strategy: 父代選擇策略
            rng: 隨機數產生器，給定種子即可重現結果
            max_workers: 評估執行緒數 (預設為 CPU 數)
            enable_parallel: 是否並行評估
            min_population_for_parallel: 低於此族群大小時循序評估
            cache_fitness: 每次執行是否以新的 CachingFitnessEvaluator 包裝評估器
        """
        if not isinstance(candidate_factory, CandidateFactory):
            raise TypeError(f"工廠必須繼承自 CandidateFactory: {type(candidate_factory)}")
        if not isinstance(evolution_scheme, EvolutionaryOperator):
            raise TypeError(f"演化算子必須繼承自 EvolutionaryOperator: {type(evolution_scheme)}")
        if not isinstance(fitness_evaluator, FitnessEvaluator):
            raise TypeError(f"評估器必須繼承自 FitnessEvaluator: {type(fitness_evaluator)}")
        if not isinstance(selection_strategy, SelectionStrategy):
            raise TypeError(f"選擇策略必須繼承自 SelectionStrategy: {type(selection_strategy)}")

        self.candidate_factory = candidate_factory
        self.evolution_scheme = evolution_scheme
        self.fitness_evaluator = fitness_evaluator
        self.selection_strategy = selection_strategy
        self.rng = rng if rng is not None else random.Random()
        self.cache_fitness = cache_fitness
        self.parallel_evaluator = ParallelFitnessEvaluator(
            n_workers=max_workers,
            enable_parallel=enable_parallel,
            min_population_for_parallel=min_population_for_parallel,
        )

        self.engine_id = str(uuid.uuid4())[:8]
        self.created_at = datetime.now()

        # 演化狀態
        self.observers: List[EvolutionObserver] = []
        self.current_generation = 0
        self.is_running = False
        self.fitness_cache: Optional[CachingFitnessEvaluator] = None
        self._satisfied_conditions: Optional[List[TerminationCondition]] = None

        logger.debug(f"演化引擎已創建 (ID: {self.engine_id}, selection={selection_strategy!r})")

    @property
    def natural_fitness(self) -> bool:
        return self.fitness_evaluator.is_natural

    def add_observer(self, observer: EvolutionObserver):
        """
        添加觀察者

        Args:
            observer: 每一代結束時被通知
        """
        if not isinstance(observer, EvolutionObserver):
            raise TypeError(f"觀察者必須繼承自 EvolutionObserver: {type(observer)}")
        self.observers.append(observer)
        logger.debug(f"已添加觀察者: {observer.__class__.__name__}")

    def remove_observer(self, observer: EvolutionObserver):
        """移除觀察者 (不存在時忽略)"""
        if observer in self.observers:
            self.observers.remove(observer)

    def evolve(self,
               population_size: int,
               elite_count: int,
               *termination_conditions: TerminationCondition,
               seed_candidates: Optional[Iterable[Any]] = None) -> Any:
        """
        執行演化並回傳最終族群中的最佳候選解

        Args:
            population_size: 族群大小 N，整個執行期間不變
            elite_count: 每代原樣保留的最佳個體數量 (0 <= elite_count < N)
            *termination_conditions: 至少一個終止條件，任一成立即停止
            seed_candidates: 可選的初始種子候選解

        Returns:
            最終族群 rank 0 的候選解

        Raises:
            ConfigurationError: 參數無效 (在執行開始前)
            EvolutionError: 工廠、評估器或算子在執行中出錯
        """
        return self.evolve_population(population_size, elite_count, *termination_conditions,
                                      seed_candidates=seed_candidates)[0].candidate

    def evolve_population(self,
                          population_size: int,
                          elite_count: int,
                          *termination_conditions: TerminationCondition,
                          seed_candidates: Optional[Iterable[Any]] = None) -> List[EvaluatedCandidate]:
        """
        執行演化並回傳最終 (已排序) 的族群

        參數與 evolve 相同。
        """
        seeds = list(seed_candidates or [])
        self._validate_run(population_size, elite_count, termination_conditions, seeds)

        evaluator = self.fitness_evaluator
        if self.cache_fitness and not isinstance(evaluator, CachingFitnessEvaluator):
            evaluator = CachingFitnessEvaluator(evaluator)
        self.fitness_cache = evaluator if isinstance(evaluator, CachingFitnessEvaluator) else None

        logger.info(f"🚀 開始演化 (引擎 ID: {self.engine_id}, 族群={population_size}, 菁英={elite_count}, "
                    f"終止條件={list(termination_conditions)})")

        self.is_running = True
        self._satisfied_conditions = None
        self.current_generation = 0
        start_time = time.monotonic()
        try:
            candidates = self._initialize(population_size, seeds)

            while True:
                population = self._evaluate(candidates, evaluator, self.current_generation)
                data = compute_population_data(
                    population,
                    natural_fitness=self.natural_fitness,
                    elite_count=elite_count,
                    generation_number=self.current_generation,
                    elapsed_time=time.monotonic() - start_time,
                )
                logger.debug(f"   第 {self.current_generation} 世代 最佳適應度: {data.best_fitness:.6f}")
                self._notify_observers(data)

                satisfied = [c for c in termination_conditions if c.should_terminate(data)]
                if satisfied:
                    self._satisfied_conditions = satisfied
                    break

                candidates = self._breed(population, elite_count, self.current_generation)
                self.current_generation += 1
        finally:
            self.is_running = False

        logger.info(f"✅ 演化完成! 世代數: {self.current_generation + 1}, "
                    f"最佳適應度: {population[0].fitness:.6f}, 終止原因: {self._satisfied_conditions}")
        if self.fitness_cache is not None:
            logger.debug(f"   快取命中 {self.fitness_cache.hits} 次，未命中 {self.fitness_cache.misses} 次")
        return population

    def get_satisfied_termination_conditions(self) -> List[TerminationCondition]:
        """
        上一次執行中成立的終止條件

        Raises:
            RuntimeError: 如果尚未完成任何一次執行
        """
        if self._satisfied_conditions is None:
            raise RuntimeError("EvolutionEngine has not terminated yet")
        return list(self._satisfied_conditions)

    def _validate_run(self, population_size: int, elite_count: int,
                      termination_conditions: Sequence[TerminationCondition], seeds: List[Any]):
        """在執行開始前驗證設定"""
        if population_size < 1:
            raise ConfigurationError(f"population_size must be >= 1, got {population_size}")
        if elite_count < 0 or elite_count >= population_size:
            raise ConfigurationError(
                f"elite_count must be in [0, population_size), got {elite_count} for population {population_size}"
            )
        if not termination_conditions:
            raise ConfigurationError("At least one termination condition must be specified")
        for condition in termination_conditions:
            if not isinstance(condition, TerminationCondition):
                raise ConfigurationError(f"終止條件必須繼承自 TerminationCondition: {type(condition)}")
            if isinstance(condition, TargetFitness) and condition.natural_fitness != self.natural_fitness:
                raise ConfigurationError(
                    f"{condition!r} does not match the evaluator direction (natural={self.natural_fitness})"
                )
        if len(seeds) > population_size:
            raise ConfigurationError(f"Too many seed candidates: {len(seeds)} > {population_size}")

    def _initialize(self, population_size: int, seeds: List[Any]) -> List[Any]:
        """創建初始族群"""
        logger.debug("🌱 創建初始族群...")
        try:
            candidates = self.candidate_factory.generate_initial_population(population_size, self.rng, seeds)
        except Exception as e:
            raise EvolutionError(f"Candidate factory failed: {e}", 0, 'initialization', e) from e
        if len(candidates) != population_size:
            raise EvolutionError(
                f"Candidate factory returned {len(candidates)} candidates, expected {population_size}",
                0, 'initialization'
            )
        return candidates

    def _evaluate(self, candidates: List[Any], evaluator: FitnessEvaluator,
                  generation: int) -> List[EvaluatedCandidate]:
        """評估並排序族群 (所有分數就緒後才回傳)"""
        try:
            scores = self.parallel_evaluator.evaluate_population(candidates, evaluator.evaluate)
        except Exception as e:
            raise EvolutionError(f"Fitness evaluation failed: {e}", generation, 'evaluation', e) from e

        for score in scores:
            if math.isnan(score):
                raise EvolutionError("Fitness evaluator returned NaN", generation, 'evaluation')

        evaluated = [EvaluatedCandidate(candidate, score) for candidate, score in zip(candidates, scores)]
        return sort_evaluated_population(evaluated, self.natural_fitness)

    def _breed(self, population: List[EvaluatedCandidate], elite_count: int, generation: int) -> List[Any]:
        """
        產生下一代候選解

        前 elite_count 個候選解原樣保留；其餘位置重複「選擇 → 管線」直到補滿，
        多出的子代會被截斷。
        """
        needed = len(population) - elite_count
        next_generation = [ec.candidate for ec in population[:elite_count]]

        offspring: List[Any] = []
        while len(offspring) < needed:
            remaining = needed - len(offspring)
            try:
                parents = self.selection_strategy.select(population, self.natural_fitness, remaining, self.rng)
                produced = self.evolution_scheme.apply(parents, self.rng)
            except Exception as e:
                raise EvolutionError(f"Breeding failed: {e}", generation, 'breeding', e) from e
            if not produced:
                raise EvolutionError("Evolution scheme produced no offspring", generation, 'breeding')
            offspring.extend(produced)

        return next_generation + offspring[:needed]

    def _notify_observers(self, data: PopulationData):
        """
        通知所有觀察者

        單一觀察者出錯只記錄日誌，不影響其他觀察者及演化循環。
        """
        for observer in list(self.observers):
            try:
                observer.population_update(data)
            except Exception:
                logger.exception(f"觀察者 {observer.__class__.__name__} 在第 {data.generation_number} 世代處理時出錯")

    def get_status(self) -> Dict[str, Any]:
        """獲取引擎狀態"""
        return {
            'engine_id': self.engine_id,
            'is_running': self.is_running,
            'current_generation': self.current_generation,
            'natural_fitness': self.natural_fitness,
            'observers': [o.__class__.__name__ for o in self.observers],
            'created_at': self.created_at.isoformat()
        }
