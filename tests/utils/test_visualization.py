"""
Tests for the fitness history plot
"""
import importlib

import matplotlib
import pandas as pd
import pytest

from poly_evo.utils import visualization
from poly_evo.utils.visualization import plot_fitness_history


def test_plot_saved(tmp_path):
    df = pd.DataFrame({'best': [3.0, 2.0, 1.0], 'avg': [5.0, 4.0, 3.0], 'std': [1.0, 1.0, 0.5]},
                      index=pd.Index([0, 1, 2], name='gen'))
    path = tmp_path / "history.png"
    plot_fitness_history(df, save_path=str(path))
    assert path.exists()


def test_missing_columns():
    with pytest.raises(ValueError):
        plot_fitness_history(pd.DataFrame({'best': [1.0]}))


def test_import_keeps_callers_backend():
    previous = matplotlib.get_backend()
    matplotlib.use('svg')
    try:
        importlib.reload(visualization)
        assert matplotlib.get_backend() == 'svg'
    finally:
        matplotlib.use(previous)
