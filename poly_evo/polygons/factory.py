"""
Polygon Image Factory

Creates random candidate images: a few random polygons with random
translucent colours and vertices anywhere on the canvas.
"""
import logging
import random
from typing import Tuple

from ..evolution.components.errors import ConfigurationError
from ..evolution.components.strategies.initialization import CandidateFactory
from .polygon import ColouredPolygon, PolygonImage

logger = logging.getLogger(__name__)

MINIMUM_POLYGON_COUNT = 2
MINIMUM_VERTEX_COUNT = 3


class PolygonImageFactory(CandidateFactory):
    """
    Random polygon images for a canvas of the given size.

    Args:
        canvas_size: (width, height) in pixels
        polygon_count: Number of polygons in a new candidate
        vertex_count: Number of vertices of a new polygon
    """

    name = "polygon_image_factory"

    def __init__(self, canvas_size: Tuple[int, int],
                 polygon_count: int = MINIMUM_POLYGON_COUNT,
                 vertex_count: int = MINIMUM_VERTEX_COUNT):
        width, height = canvas_size
        if width < 1 or height < 1:
            raise ConfigurationError(f"canvas_size must be positive, got {canvas_size}")
        if polygon_count < 1 or vertex_count < MINIMUM_VERTEX_COUNT:
            raise ConfigurationError(
                f"Need polygon_count >= 1 and vertex_count >= {MINIMUM_VERTEX_COUNT}, "
                f"got {polygon_count}, {vertex_count}"
            )
        self.canvas_size = (width, height)
        self.polygon_count = polygon_count
        self.vertex_count = vertex_count

    def generate_random_candidate(self, rng: random.Random) -> PolygonImage:
        return tuple(self.create_random_polygon(rng) for _ in range(self.polygon_count))

    def create_random_polygon(self, rng: random.Random) -> ColouredPolygon:
        colour = (rng.randrange(256), rng.randrange(256), rng.randrange(256), rng.randrange(256))
        return ColouredPolygon(colour, tuple(self.random_point(rng) for _ in range(self.vertex_count)))

    def random_point(self, rng: random.Random):
        width, height = self.canvas_size
        return (rng.randrange(width), rng.randrange(height))
