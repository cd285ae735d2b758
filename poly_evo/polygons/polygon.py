"""
Coloured Polygon Genome

A candidate image is an ordered tuple of translucent polygons, painted in
order onto a black canvas. Polygons are frozen dataclasses, so a candidate
is a hashable value and can be used as a fitness-cache key.
"""
from dataclasses import dataclass, replace
from typing import Tuple

Colour = Tuple[int, int, int, int]
Point = Tuple[int, int]


@dataclass(frozen=True)
class ColouredPolygon:
    """An RGBA colour and the polygon's vertices in canvas coordinates."""

    colour: Colour
    vertices: Tuple[Point, ...]

    def __post_init__(self):
        if len(self.colour) != 4 or any(not 0 <= c <= 255 for c in self.colour):
            raise ValueError(f"colour must be four channels in [0, 255], got {self.colour}")
        if len(self.vertices) < 3:
            raise ValueError(f"a polygon needs at least 3 vertices, got {len(self.vertices)}")

    def with_colour(self, colour: Colour) -> 'ColouredPolygon':
        return replace(self, colour=tuple(colour))

    def with_vertices(self, vertices) -> 'ColouredPolygon':
        return replace(self, vertices=tuple(tuple(v) for v in vertices))


PolygonImage = Tuple[ColouredPolygon, ...]
