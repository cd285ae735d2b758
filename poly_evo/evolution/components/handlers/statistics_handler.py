"""
統計處理器 - 以 DEAP Logbook 記錄每一代的適應度統計
"""
import logging
from typing import List

import numpy as np
import pandas as pd
from deap import tools

from .base import EvolutionObserver
from ..population import PopulationData

logger = logging.getLogger(__name__)


class StatisticsObserver(EvolutionObserver):
    """
    Records per-generation fitness statistics.

    The logbook is cleared whenever a new run starts (generation 0), so one
    observer can be registered on an engine that is run several times.
    """

    name = "statistics_handler"

    def __init__(self):
        self.stats = tools.Statistics(key=lambda ec: ec.fitness)
        self.stats.register("avg", np.mean)
        self.stats.register("std", np.std)
        self.stats.register("min", np.min)
        self.stats.register("max", np.max)
        self.logbook = self._new_logbook()

    def _new_logbook(self) -> tools.Logbook:
        logbook = tools.Logbook()
        logbook.header = ['gen', 'best', 'elapsed'] + self.stats.fields
        return logbook

    def population_update(self, data: PopulationData):
        if data.generation_number == 0:
            self.logbook = self._new_logbook()
        record = self.stats.compile(data.population)
        self.logbook.record(gen=data.generation_number, best=data.best_fitness,
                            elapsed=data.elapsed_time, **record)

    def best_fitness_history(self) -> List[float]:
        """每一代的最佳適應度"""
        return self.logbook.select('best')

    def to_dataframe(self) -> pd.DataFrame:
        """Logbook 轉換為 DataFrame，以世代為索引"""
        if not self.logbook:
            return pd.DataFrame(columns=self.logbook.header).set_index('gen')
        return pd.DataFrame(list(self.logbook)).set_index('gen')
