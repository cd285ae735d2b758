"""
組件化演化計算框架

將演化過程中的各個部分（候選解工廠、選擇、演化算子、適應度評估、
終止條件、觀察者）抽象成可插拔的組件，並提供依配置字典建立引擎的工廠函數。
"""

import logging
import random
from typing import Any, Dict, List, Optional

from .engine import EvolutionEngine
from .errors import ConfigurationError, EvolutionError
from .individual import EvaluatedCandidate
from .population import PopulationData
from .task import AbortControl, EvolutionTask
from .termination import (
    TerminationCondition, GenerationCount, ElapsedTime, TargetFitness, Stagnation, Abort
)

logger = logging.getLogger(__name__)

# 策略名稱到類名的映射
STRATEGY_MAPPINGS = {
    'selection': {
        'tournament': 'TournamentSelection',
    },
}

DEFAULT_EVOLUTION_CONFIG = {
    'population_size': 15,
    'elite_count': 3,
    'seed': None,
    'max_workers': None,
    'enable_parallel': True,
    'min_population_for_parallel': 2,
    'cache_fitness': True,
}

def _create_strategy(strategy_type: str, config: Dict[str, Any]):
    """
    根據配置動態創建演化策略

    Args:
        strategy_type: 策略類型 (目前為 'selection')
        config: 完整配置字典，讀取 config[strategy_type]['method'] 與 ['parameters']

    Returns:
        創建的策略實例

    Raises:
        ConfigurationError: 如果策略不存在或參數無效
    """
    if strategy_type not in STRATEGY_MAPPINGS:
        raise ConfigurationError(f"不支持的策略類型: {strategy_type}")

    strategy_config = config.get(strategy_type, {})
    strategy_name = strategy_config.get('method')
    mappings = STRATEGY_MAPPINGS[strategy_type]
    if strategy_name not in mappings:
        raise ConfigurationError(f"不支持的{strategy_type}策略: {strategy_name}。可用策略: {list(mappings)}")

    from . import strategies
    strategy_class = getattr(strategies, mappings[strategy_name])
    strategy_params = strategy_config.get('parameters', {})

    try:
        return strategy_class(**strategy_params)
    except TypeError as e:
        raise ConfigurationError(f"創建策略 {strategy_type}.{strategy_name} 失敗: {e}. 參數: {strategy_params}") from e

def create_termination_conditions(config: Dict[str, Any],
                                  natural_fitness: bool,
                                  abort_control: Optional[AbortControl] = None) -> List[TerminationCondition]:
    """
    根據 config['termination'] 創建終止條件

    未設置 (None) 的項目會被略過。提供 abort_control 時會加上其中止條件。

    Args:
        config: 配置字典
        natural_fitness: 評估器的適應度方向 (用於 target_fitness)
        abort_control: 可選的中止控制

    Returns:
        終止條件列表

    Raises:
        ConfigurationError: 如果沒有任何終止條件
    """
    termination = config.get('termination', {})
    conditions: List[TerminationCondition] = []

    if termination.get('generation_count') is not None:
        conditions.append(GenerationCount(int(termination['generation_count'])))
    if termination.get('elapsed_time') is not None:
        conditions.append(ElapsedTime(float(termination['elapsed_time'])))
    if termination.get('target_fitness') is not None:
        conditions.append(TargetFitness(float(termination['target_fitness']), natural_fitness))
    stagnation = termination.get('stagnation')
    if stagnation and stagnation.get('generations') is not None:
        conditions.append(Stagnation(int(stagnation['generations']),
                                     bool(stagnation.get('use_population_average', False))))
    if abort_control is not None:
        conditions.append(abort_control.termination_condition)

    if not conditions:
        raise ConfigurationError("配置中沒有任何終止條件")
    return conditions

def create_evolution_engine(config: Dict[str, Any],
                            candidate_factory,
                            evolution_scheme,
                            fitness_evaluator) -> EvolutionEngine:
    """
    工廠函數：根據配置創建演化引擎

    領域相關的組件 (候選解工廠、演化管線、評估器) 由呼叫端提供；
    選擇策略與引擎參數來自配置。

    Args:
        config: 配置字典，包含 'evolution' 與 'selection' 部分
        candidate_factory: 候選解工廠
        evolution_scheme: 演化算子 / 管線
        fitness_evaluator: 適應度評估器

    Returns:
        配置好的演化引擎實例

    Raises:
        ConfigurationError: 如果配置參數無效
    """
    for section in ['evolution', 'selection']:
        if section not in config:
            raise ConfigurationError(f"配置文件缺少必要部分: {section}")

    evolution = {**DEFAULT_EVOLUTION_CONFIG, **config['evolution']}
    selection_strategy = _create_strategy('selection', config)

    rng = random.Random(evolution['seed'])
    engine = EvolutionEngine(
        candidate_factory,
        evolution_scheme,
        fitness_evaluator,
        selection_strategy,
        rng=rng,
        max_workers=evolution['max_workers'],
        enable_parallel=evolution['enable_parallel'],
        min_population_for_parallel=evolution['min_population_for_parallel'],
        cache_fitness=evolution['cache_fitness'],
    )

    logger.info(f"🏗️ 演化引擎創建完成 (ID: {engine.engine_id})")
    logger.info(f"   ├─ 選擇策略: {selection_strategy!r}")
    logger.info(f"   ├─ 評估器: {fitness_evaluator.__class__.__name__} (natural={fitness_evaluator.is_natural})")
    logger.info(f"   └─ 執行緒數: {engine.parallel_evaluator.n_workers} (parallel={evolution['enable_parallel']})")
    return engine

__all__ = [
    'EvolutionEngine', 'EvaluatedCandidate', 'PopulationData',
    'ConfigurationError', 'EvolutionError',
    'AbortControl', 'EvolutionTask',
    'TerminationCondition', 'GenerationCount', 'ElapsedTime', 'TargetFitness', 'Stagnation', 'Abort',
    'create_evolution_engine', 'create_termination_conditions', 'DEFAULT_EVOLUTION_CONFIG',
]
