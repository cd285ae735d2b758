"""
Shared test components: a deterministic "one-max" domain.

Candidates are tuples of bits; the natural evaluator counts ones and the
minimising evaluator counts them too but treats lower as better.
"""
import random
import threading

import pytest

from poly_evo.evolution.components import EvolutionEngine
from poly_evo.evolution.components.evaluators import FitnessEvaluator
from poly_evo.evolution.components.handlers import EvolutionObserver
from poly_evo.evolution.components.strategies import (
    CandidateFactory, EvolutionPipeline, ListCrossover, ListOperator, MutationStrategy, TournamentSelection
)


class BitStringFactory(CandidateFactory):
    name = "bit_string_factory"

    def __init__(self, length=12):
        self.length = length

    def generate_random_candidate(self, rng):
        return tuple(rng.randint(0, 1) for _ in range(self.length))


class OneMaxEvaluator(FitnessEvaluator):
    """Counts ones; records how many times it was called."""

    def __init__(self, natural=True):
        self.natural = natural
        self.calls = 0
        self._lock = threading.Lock()

    @property
    def is_natural(self):
        return self.natural

    def evaluate(self, candidate):
        with self._lock:
            self.calls += 1
        return float(sum(candidate))


class ConstantEvaluator(FitnessEvaluator):
    is_natural = True

    def evaluate(self, candidate):
        return 1.0


class BitFlip(MutationStrategy):
    name = "bit_flip"

    def mutate(self, candidate, rng):
        return 1 - candidate


class RecordingObserver(EvolutionObserver):
    def __init__(self):
        self.updates = []

    def population_update(self, data):
        self.updates.append(data)

    @property
    def generations(self):
        return [d.generation_number for d in self.updates]


def make_pipeline():
    return EvolutionPipeline([ListCrossover(1, 0.8), ListOperator(BitFlip(0.05))])


def make_engine(seed=1, evaluator=None, factory=None, pipeline=None, selection=None, **kwargs):
    return EvolutionEngine(
        factory or BitStringFactory(),
        pipeline or make_pipeline(),
        evaluator or OneMaxEvaluator(),
        selection or TournamentSelection(0.8),
        rng=random.Random(seed),
        **kwargs
    )


@pytest.fixture
def engine():
    return make_engine()


@pytest.fixture
def recorder():
    return RecordingObserver()
