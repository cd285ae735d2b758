"""
觀察者模組
"""

from .base import EvolutionObserver
from .logging_handler import LoggingObserver, ProgressObserver
from .statistics_handler import StatisticsObserver
from .queue_handler import QueueObserver

__all__ = [
    'EvolutionObserver',
    'LoggingObserver',
    'ProgressObserver',
    'StatisticsObserver',
    'QueueObserver',
]
