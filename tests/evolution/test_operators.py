"""
Tests for crossover, mutation and composite operators
"""
import random

import pytest

from poly_evo.evolution.components import ConfigurationError
from poly_evo.evolution.components.strategies import (
    EvolutionaryOperator, EvolutionPipeline, IdentityOperator, ListCrossover, ListOperator, SplitEvolution
)

from conftest import BitFlip


class Tag(EvolutionaryOperator):
    """在每個候選解後加上標記"""

    def __init__(self, tag):
        self.tag = tag

    def apply(self, candidates, rng):
        return [c + (self.tag,) for c in candidates]


class TestListCrossover:

    def test_children_keep_genes_at_each_position(self):
        parent1, parent2 = (0,) * 8, (1,) * 8
        child1, child2 = ListCrossover(2).mate(parent1, parent2, random.Random(3))

        assert isinstance(child1, tuple) and isinstance(child2, tuple)
        assert len(child1) == len(child2) == 8
        for i in range(8):
            assert sorted([child1[i], child2[i]]) == [0, 1]

    def test_lists_stay_lists(self):
        child1, child2 = ListCrossover().mate([1, 2, 3], [4, 5, 6], random.Random(0))
        assert isinstance(child1, list)

    def test_odd_candidate_passes_through(self):
        candidates = [(0,) * 4, (1,) * 4, (2,) * 4]
        offspring = ListCrossover(1, crossover_probability=0.0).apply(candidates, random.Random(0))

        assert sorted(offspring) == sorted(candidates)

    def test_does_not_modify_parents(self):
        parents = [[0, 0, 0, 0], [1, 1, 1, 1]]
        ListCrossover(1).apply(parents, random.Random(0))
        assert parents == [[0, 0, 0, 0], [1, 1, 1, 1]]

    def test_invalid_arguments(self):
        with pytest.raises(ConfigurationError):
            ListCrossover(crossover_points=0)
        with pytest.raises(ConfigurationError):
            ListCrossover(crossover_probability=1.5)


class TestMutation:

    def test_probability_zero_and_one(self):
        candidates = [0, 1, 0]
        assert BitFlip(0.0).apply(candidates, random.Random(0)) == [0, 1, 0]
        assert BitFlip(1.0).apply(candidates, random.Random(0)) == [1, 0, 1]

    def test_list_operator_mutates_elements(self):
        offspring = ListOperator(BitFlip(1.0)).apply([(0, 1, 1)], random.Random(0))
        assert offspring == [(1, 0, 0)]

    def test_invalid_probability(self):
        with pytest.raises(ConfigurationError):
            BitFlip(-0.1)


class TestCompositeOperators:

    def test_pipeline_applies_in_order(self):
        pipeline = EvolutionPipeline([Tag('a'), Tag('b'), IdentityOperator()])
        assert pipeline.apply([(), (0,)], random.Random(0)) == [('a', 'b'), (0, 'a', 'b')]

    def test_empty_pipeline(self):
        with pytest.raises(ConfigurationError):
            EvolutionPipeline([])

    def test_split_evolution(self):
        split = SplitEvolution(Tag('x'), Tag('y'), ratio=0.25)
        offspring = split.apply([(i,) for i in range(8)], random.Random(0))

        assert len(offspring) == 8
        assert sum(1 for c in offspring if c[-1] == 'x') == 2
        assert sorted(c[0] for c in offspring) == list(range(8))

    def test_describe(self):
        description = ListCrossover(2, 0.5).describe()
        assert description == {'name': 'list_crossover', 'crossover_probability': 0.5, 'crossover_points': 2}
