"""
Polygon Evolution Pipeline

Builds the variation pipeline for polygon images from a set of operator
probabilities (the values a user would tune between runs).
"""
import logging
from typing import Any, Dict, Optional

from ..evolution.components.strategies import EvolutionPipeline, ListCrossover, ListOperator
from .factory import PolygonImageFactory
from .mutation import (
    AddPolygonMutation, AddVertexMutation, MovePolygonMutation, MoveVertexMutation,
    PolygonColourMutation, RemovePolygonMutation, RemoveVertexMutation,
)

logger = logging.getLogger(__name__)

DEFAULT_PROBABILITIES = {
    'crossover': 0.5,
    'add_polygon': 0.02,
    'remove_polygon': 0.02,
    'move_polygon': 0.01,
    'add_vertex': 0.01,
    'remove_vertex': 0.01,
    'move_vertex': 0.01,
    'change_colour': 0.01,
}


def create_evolution_pipeline(factory: PolygonImageFactory,
                              probabilities: Optional[Dict[str, float]] = None,
                              max_polygons: int = 50,
                              max_vertices: int = 10,
                              crossover_points: int = 2) -> EvolutionPipeline:
    """
    Crossover followed by image-level and polygon-level mutations.

    Args:
        factory: Supplies the canvas size and new random polygons
        probabilities: Overrides for DEFAULT_PROBABILITIES; unknown keys are rejected
        max_polygons: Upper bound on polygons per image
        max_vertices: Upper bound on vertices per polygon
        crossover_points: Crossover points per mating

    Returns:
        The pipeline operator
    """
    probabilities = probabilities or {}
    unknown = set(probabilities) - set(DEFAULT_PROBABILITIES)
    if unknown:
        raise ValueError(f"Unknown operator probabilities: {sorted(unknown)}")
    p: Dict[str, Any] = {**DEFAULT_PROBABILITIES, **probabilities}
    canvas_size = factory.canvas_size

    operators = [
        ListCrossover(crossover_points, p['crossover']),
        RemovePolygonMutation(p['remove_polygon']),
        MovePolygonMutation(p['move_polygon']),
        ListOperator(RemoveVertexMutation(p['remove_vertex'])),
        ListOperator(MoveVertexMutation(p['move_vertex'], canvas_size)),
        ListOperator(AddVertexMutation(p['add_vertex'], canvas_size, max_vertices)),
        ListOperator(PolygonColourMutation(p['change_colour'])),
        AddPolygonMutation(p['add_polygon'], factory, max_polygons),
    ]
    logger.debug(f"Polygon pipeline probabilities: {p}")
    return EvolutionPipeline(operators)
