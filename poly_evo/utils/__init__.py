from .visualization import plot_fitness_history

__all__ = ['plot_fitness_history']
