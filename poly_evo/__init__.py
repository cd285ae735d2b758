"""
poly_evo

A component-based generational evolution engine with fitness caching,
concurrent evaluation, elitism and cooperative cancellation, plus a
polygon-image domain plug-in.
"""

__version__ = "0.1.0"
