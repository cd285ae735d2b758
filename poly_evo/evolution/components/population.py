"""
世代快照類

封裝每一世代結束時的族群統計資訊，提供給觀察者與終止條件使用。
快照為唯讀物件，族群以 tuple 形式保存。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from .individual import EvaluatedCandidate


@dataclass(frozen=True)
class PopulationData:
    """
    Immutable snapshot of one generation.

    Attributes:
        best_candidate: Rank-0 candidate of the generation
        best_fitness: Fitness of the best candidate
        mean_fitness: Arithmetic mean of all fitness scores
        fitness_standard_deviation: Population standard deviation of the scores
        natural_fitness: True when higher fitness is better
        population_size: Number of candidates (constant for a run)
        elite_count: Number of candidates carried over unchanged
        generation_number: 0-based generation index
        elapsed_time: Seconds since the run started
        population: Sorted evaluated population
    """

    best_candidate: Any
    best_fitness: float
    mean_fitness: float
    fitness_standard_deviation: float
    natural_fitness: bool
    population_size: int
    elite_count: int
    generation_number: int
    elapsed_time: float
    population: Tuple[EvaluatedCandidate, ...] = field(repr=False, default=())

    def to_dict(self) -> Dict[str, Any]:
        """Statistics only, without the population (用於日誌與統計)"""
        return {
            'generation': self.generation_number,
            'best_fitness': self.best_fitness,
            'mean_fitness': self.mean_fitness,
            'std_fitness': self.fitness_standard_deviation,
            'population_size': self.population_size,
            'elite_count': self.elite_count,
            'elapsed_time': self.elapsed_time,
        }


def compute_population_data(population: Sequence[EvaluatedCandidate],
                            natural_fitness: bool,
                            elite_count: int,
                            generation_number: int,
                            elapsed_time: float) -> PopulationData:
    """
    計算世代統計

    Args:
        population: 已排序的族群 (rank 0 在最前)
        natural_fitness: 適應度方向
        elite_count: 菁英數量
        generation_number: 世代編號
        elapsed_time: 已經過的秒數

    Returns:
        PopulationData 快照
    """
    scores = np.array([ec.fitness for ec in population], dtype=float)
    return PopulationData(
        best_candidate=population[0].candidate,
        best_fitness=population[0].fitness,
        mean_fitness=float(np.mean(scores)),
        fitness_standard_deviation=float(np.std(scores)),
        natural_fitness=natural_fitness,
        population_size=len(population),
        elite_count=elite_count,
        generation_number=generation_number,
        elapsed_time=elapsed_time,
        population=tuple(population),
    )
