"""
演化策略模組

包含所有可插拔策略的實現：
- 初始化策略 (候選解工廠)
- 選擇策略
- 交配策略
- 變異策略
- 操作策略 (串聯 / 並聯組合)
"""

from .base import EvolutionStrategy
from .initialization import CandidateFactory
from .selection import SelectionStrategy, TournamentSelection
from .operation import EvolutionaryOperator, EvolutionPipeline, SplitEvolution, IdentityOperator
from .crossover import CrossoverStrategy, ListCrossover
from .mutation import MutationStrategy, ListOperator

__all__ = [
    'EvolutionStrategy',
    # 初始化策略
    'CandidateFactory',
    # 選擇策略
    'SelectionStrategy', 'TournamentSelection',
    # 操作策略
    'EvolutionaryOperator', 'EvolutionPipeline', 'SplitEvolution', 'IdentityOperator',
    # 交配策略
    'CrossoverStrategy', 'ListCrossover',
    # 變異策略
    'MutationStrategy', 'ListOperator',
]
