"""
Polygon Image Renderer

Paints a candidate onto a black RGB canvas with alpha blending.
"""
from typing import Tuple

from PIL import Image, ImageDraw

from .polygon import PolygonImage

BACKGROUND = (0, 0, 0)


def render(candidate: PolygonImage, canvas_size: Tuple[int, int], scale: float = 1.0) -> Image.Image:
    """
    Render polygons in order, later polygons on top.

    Args:
        candidate: Polygons to paint
        canvas_size: (width, height) of the unscaled canvas
        scale: Output scale factor (vertices are scaled, not clipped)

    Returns:
        RGB image of size canvas_size * scale
    """
    width = max(1, round(canvas_size[0] * scale))
    height = max(1, round(canvas_size[1] * scale))
    image = Image.new('RGB', (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image, 'RGBA')
    for polygon in candidate:
        points = [(x * scale, y * scale) for x, y in polygon.vertices]
        draw.polygon(points, fill=polygon.colour)
    return image
