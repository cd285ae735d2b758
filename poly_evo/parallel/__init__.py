"""
Parallel Execution Module

This module provides the bounded worker pool used to score a generation.
"""

from .fitness_evaluator import ParallelFitnessEvaluator

__all__ = [
    'ParallelFitnessEvaluator',
]
