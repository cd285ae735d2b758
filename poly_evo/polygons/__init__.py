"""
Polygon Image Domain

Genome, factory, evaluator and operators for approximating a picture with
a list of translucent polygons.
"""
from .polygon import ColouredPolygon, PolygonImage
from .factory import PolygonImageFactory
from .renderer import render
from .evaluator import PolygonImageEvaluator
from .pipeline import create_evolution_pipeline, DEFAULT_PROBABILITIES

__all__ = [
    'ColouredPolygon', 'PolygonImage', 'PolygonImageFactory', 'render',
    'PolygonImageEvaluator', 'create_evolution_pipeline', 'DEFAULT_PROBABILITIES',
]
