"""
Engine Exceptions

Configuration problems are reported before a run starts; faults raised by
caller-supplied collaborators (factory, evaluator, operators) during a run
are wrapped with the generation and phase in which they happened.
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Invalid engine, strategy or run configuration."""


class EvolutionError(RuntimeError):
    """
    A run failed because a required collaborator raised.

    Attributes:
        generation: Generation number in which the fault occurred
        phase: 'initialization', 'evaluation' or 'breeding'
    """

    def __init__(self, message: str, generation: int, phase: str, cause: Optional[BaseException] = None):
        super().__init__(f"{message} (generation={generation}, phase={phase})")
        self.generation = generation
        self.phase = phase
        self.cause = cause
