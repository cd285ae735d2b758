"""
Polygon Image Evaluator

Scores a candidate by rendering it and comparing it pixel by pixel with
the target picture. Lower is better: a perfect match scores 0.
"""
import logging
from typing import Tuple

import numpy as np
from PIL import Image

from ..evolution.components.evaluators.base import FitnessEvaluator
from .polygon import PolygonImage
from .renderer import render

logger = logging.getLogger(__name__)


class PolygonImageEvaluator(FitnessEvaluator):
    """
    Sum over pixels of the Euclidean RGB distance to the target.

    Both images are compared at a reduced resolution so that the longer
    side of the comparison grid is at most `max_evaluation_size` pixels.
    """

    name = "polygon_image_evaluator"

    def __init__(self, target_image: Image.Image, max_evaluation_size: int = 100):
        if max_evaluation_size < 1:
            raise ValueError(f"max_evaluation_size must be >= 1, got {max_evaluation_size}")
        self.canvas_size: Tuple[int, int] = target_image.size
        self.scale = min(1.0, max_evaluation_size / max(self.canvas_size))
        evaluation_size = (max(1, round(self.canvas_size[0] * self.scale)),
                           max(1, round(self.canvas_size[1] * self.scale)))
        scaled = target_image.convert('RGB').resize(evaluation_size, Image.BILINEAR)
        self._target = np.asarray(scaled, dtype=np.float64)
        logger.debug(f"Evaluating at {evaluation_size} (scale={self.scale:.3f})")

    @property
    def is_natural(self) -> bool:
        return False

    def evaluate(self, candidate: PolygonImage) -> float:
        rendered = render(candidate, self.canvas_size, self.scale)
        if rendered.size != (self._target.shape[1], self._target.shape[0]):
            rendered = rendered.resize((self._target.shape[1], self._target.shape[0]), Image.BILINEAR)
        difference = np.asarray(rendered, dtype=np.float64) - self._target
        return float(np.sqrt((difference ** 2).sum(axis=2)).sum())
