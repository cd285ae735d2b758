"""
Polygon Mutations

Image-level mutations change the list of polygons (add, remove, reorder);
polygon-level mutations change one polygon's vertices or colour and are
applied to every polygon of an image through `ListOperator`.
"""
import logging
import random
from typing import Tuple

from ..evolution.components.strategies.mutation import MutationStrategy
from .factory import MINIMUM_POLYGON_COUNT, MINIMUM_VERTEX_COUNT, PolygonImageFactory
from .polygon import ColouredPolygon, PolygonImage

logger = logging.getLogger(__name__)


def _clamp(value: float, low: int, high: int) -> int:
    return int(min(max(round(value), low), high))


class AddPolygonMutation(MutationStrategy):
    """Inserts a random polygon at a random position, up to max_polygons."""

    name = "add_polygon"

    def __init__(self, mutation_probability: float, factory: PolygonImageFactory, max_polygons: int = 50):
        super().__init__(mutation_probability)
        self.factory = factory
        self.max_polygons = max_polygons

    def mutate(self, candidate: PolygonImage, rng: random.Random) -> PolygonImage:
        if len(candidate) >= self.max_polygons:
            return candidate
        index = rng.randint(0, len(candidate))
        polygon = self.factory.create_random_polygon(rng)
        return candidate[:index] + (polygon,) + candidate[index:]


class RemovePolygonMutation(MutationStrategy):
    """Removes a random polygon, never going below the minimum count."""

    name = "remove_polygon"

    def mutate(self, candidate, rng):
        if len(candidate) <= MINIMUM_POLYGON_COUNT:
            return candidate
        index = rng.randrange(len(candidate))
        return candidate[:index] + candidate[index + 1:]


class MovePolygonMutation(MutationStrategy):
    """Moves a random polygon to another depth (drawing order)."""

    name = "move_polygon"

    def mutate(self, candidate, rng):
        if len(candidate) < 2:
            return candidate
        polygons = list(candidate)
        polygon = polygons.pop(rng.randrange(len(polygons)))
        polygons.insert(rng.randint(0, len(polygons)), polygon)
        return tuple(polygons)


class AddVertexMutation(MutationStrategy):
    """Inserts a random vertex into a polygon, up to max_vertices."""

    name = "add_vertex"

    def __init__(self, mutation_probability: float, canvas_size: Tuple[int, int], max_vertices: int = 10):
        super().__init__(mutation_probability)
        self.canvas_size = canvas_size
        self.max_vertices = max_vertices

    def mutate(self, polygon: ColouredPolygon, rng: random.Random) -> ColouredPolygon:
        if len(polygon.vertices) >= self.max_vertices:
            return polygon
        width, height = self.canvas_size
        index = rng.randint(0, len(polygon.vertices))
        point = (rng.randrange(width), rng.randrange(height))
        return polygon.with_vertices(polygon.vertices[:index] + (point,) + polygon.vertices[index:])


class RemoveVertexMutation(MutationStrategy):
    """Removes a random vertex while keeping at least a triangle."""

    name = "remove_vertex"

    def mutate(self, polygon, rng):
        if len(polygon.vertices) <= MINIMUM_VERTEX_COUNT:
            return polygon
        index = rng.randrange(len(polygon.vertices))
        return polygon.with_vertices(polygon.vertices[:index] + polygon.vertices[index + 1:])


class MoveVertexMutation(MutationStrategy):
    """Shifts one vertex by a Gaussian offset, clamped to the canvas."""

    name = "move_vertex"

    def __init__(self, mutation_probability: float, canvas_size: Tuple[int, int], sigma: float = 10.0):
        super().__init__(mutation_probability)
        self.canvas_size = canvas_size
        self.sigma = sigma

    def mutate(self, polygon, rng):
        width, height = self.canvas_size
        index = rng.randrange(len(polygon.vertices))
        x, y = polygon.vertices[index]
        moved = (_clamp(x + rng.gauss(0, self.sigma), 0, width - 1),
                 _clamp(y + rng.gauss(0, self.sigma), 0, height - 1))
        vertices = list(polygon.vertices)
        vertices[index] = moved
        return polygon.with_vertices(vertices)


class PolygonColourMutation(MutationStrategy):
    """Perturbs every RGBA channel by a Gaussian offset."""

    name = "polygon_colour"

    def __init__(self, mutation_probability: float, sigma: float = 20.0):
        super().__init__(mutation_probability)
        self.sigma = sigma

    def mutate(self, polygon, rng):
        colour = tuple(_clamp(c + rng.gauss(0, self.sigma), 0, 255) for c in polygon.colour)
        return polygon.with_colour(colour)
