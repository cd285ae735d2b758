"""適應度評估器模組"""

from .base import FitnessEvaluator
from .caching import CachingFitnessEvaluator

__all__ = ['FitnessEvaluator', 'CachingFitnessEvaluator']
