"""
已評估個體類

將候選解與其適應度及排名綁定。候選解本身是不可變的值，
因此同一個候選解可以安全地被多個世代快照引用。
"""

from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class EvaluatedCandidate(Generic[T]):
    """
    Candidate paired with its fitness score and rank.

    Rank 0 is the best candidate of its generation. Ranks are assigned by
    the engine after each evaluation pass and are consistent with the
    evaluator's optimisation direction.
    """

    candidate: T
    fitness: float
    rank: int = -1

    def is_fitter_than(self, other: 'EvaluatedCandidate', natural_fitness: bool) -> bool:
        """Strict comparison in the evaluator's better-direction."""
        if natural_fitness:
            return self.fitness > other.fitness
        return self.fitness < other.fitness

    def __repr__(self) -> str:
        return f"EvaluatedCandidate(rank={self.rank}, fitness={self.fitness:.6f})"


def sort_evaluated_population(population: Sequence[EvaluatedCandidate],
                              natural_fitness: bool) -> List[EvaluatedCandidate]:
    """
    依適應度排序並重新指定排名

    Python 的 sorted 是穩定排序（reverse=True 亦然），
    因此相同適應度的個體保持原本的順序，確保結果可重現。

    Args:
        population: 已評估的個體
        natural_fitness: True 表示適應度越高越好

    Returns:
        排序後的新列表，rank 由 0 開始
    """
    ordered = sorted(population, key=lambda ec: ec.fitness, reverse=natural_fitness)
    return [EvaluatedCandidate(ec.candidate, ec.fitness, rank) for rank, ec in enumerate(ordered)]

