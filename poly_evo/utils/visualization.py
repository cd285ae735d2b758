"""
Visualization Utilities Module

This module provides helper functions for plotting the progress of an
evolution run from the statistics collected by StatisticsObserver.
"""
import logging
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd

logger = logging.getLogger(__name__)


def plot_fitness_history(df: pd.DataFrame, title: str = 'Fitness History', save_path: Optional[str] = None):
    """
    Plots the best and mean fitness of each generation.

    Args:
        df: The DataFrame returned by StatisticsObserver.to_dataframe(), indexed by generation.
        title: The plot title.
        save_path: If provided, the plot will be saved to this file path.
                   Otherwise, the plot will be displayed interactively.
                   Pass a save path when running without a display.
    """
    missing = {'best', 'avg', 'std'} - set(df.columns)
    if missing:
        raise ValueError(f"DataFrame is missing columns: {sorted(missing)}")

    plt.style.use('seaborn-v0_8-darkgrid')
    fig, ax = plt.subplots(figsize=(15, 7))

    ax.plot(df.index, df['best'], label='Best Fitness', color='dodgerblue')
    ax.plot(df.index, df['avg'], label='Mean Fitness', color='darkorange')
    ax.fill_between(df.index, df['avg'] - df['std'], df['avg'] + df['std'],
                    color='darkorange', alpha=0.2, label='Mean ± Std')
    ax.set_title(title, fontsize=16)
    ax.set_xlabel('Generation', fontsize=12)
    ax.set_ylabel('Fitness', fontsize=12)
    ax.legend()
    ax.grid(True)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path)
        plt.close(fig)
        logger.info(f"Plot saved to {save_path}")
    else:
        plt.show()
