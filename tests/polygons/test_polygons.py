"""
Tests for the polygon image genome, factory, renderer and evaluator
"""
import random

import pytest
from PIL import Image

from poly_evo.evolution.components import ConfigurationError
from poly_evo.polygons import ColouredPolygon, PolygonImageEvaluator, PolygonImageFactory, render

TRIANGLE = ((0, 0), (9, 0), (0, 9))


class TestColouredPolygon:

    def test_is_hashable_value(self):
        a = ColouredPolygon((1, 2, 3, 4), TRIANGLE)
        b = ColouredPolygon((1, 2, 3, 4), TRIANGLE)
        assert a == b
        assert hash((a,)) == hash((b,))

    def test_invalid_colour(self):
        with pytest.raises(ValueError):
            ColouredPolygon((0, 0, 0, 256), TRIANGLE)
        with pytest.raises(ValueError):
            ColouredPolygon((0, 0, 0), TRIANGLE)

    def test_needs_three_vertices(self):
        with pytest.raises(ValueError):
            ColouredPolygon((0, 0, 0, 0), ((0, 0), (1, 1)))

    def test_with_helpers_return_new_values(self):
        polygon = ColouredPolygon((1, 2, 3, 4), TRIANGLE)
        recoloured = polygon.with_colour([5, 6, 7, 8])
        moved = polygon.with_vertices([[1, 1], [2, 2], [3, 1]])

        assert polygon.colour == (1, 2, 3, 4)
        assert recoloured.colour == (5, 6, 7, 8)
        assert moved.vertices == ((1, 1), (2, 2), (3, 1))


class TestPolygonImageFactory:

    def test_random_candidate_shape(self):
        factory = PolygonImageFactory((40, 30), polygon_count=3, vertex_count=4)
        candidate = factory.generate_random_candidate(random.Random(0))

        assert isinstance(candidate, tuple)
        assert len(candidate) == 3
        for polygon in candidate:
            assert len(polygon.vertices) == 4
            assert all(0 <= x < 40 and 0 <= y < 30 for x, y in polygon.vertices)

    def test_initial_population(self):
        factory = PolygonImageFactory((10, 10))
        population = factory.generate_initial_population(5, random.Random(1))
        assert len(population) == 5
        assert all(len(c) == 2 for c in population)

    def test_invalid_arguments(self):
        with pytest.raises(ConfigurationError):
            PolygonImageFactory((0, 10))
        with pytest.raises(ConfigurationError):
            PolygonImageFactory((10, 10), vertex_count=2)


class TestRenderer:

    def test_empty_candidate_is_black(self):
        image = render((), (8, 6))
        assert image.size == (8, 6)
        assert image.mode == 'RGB'
        assert image.getextrema() == ((0, 0), (0, 0), (0, 0))

    def test_opaque_polygon_covers_canvas(self):
        cover = ColouredPolygon((255, 0, 0, 255), ((0, 0), (9, 0), (9, 9), (0, 9)))
        image = render((cover,), (10, 10))
        assert image.getpixel((5, 5)) == (255, 0, 0)

    def test_scale(self):
        assert render((), (100, 50), scale=0.5).size == (50, 25)


class TestPolygonImageEvaluator:

    def setup_method(self):
        self.factory = PolygonImageFactory((20, 20), polygon_count=4)
        self.candidate = self.factory.generate_random_candidate(random.Random(3))
        self.target = render(self.candidate, (20, 20))

    def test_perfect_match_scores_zero(self):
        evaluator = PolygonImageEvaluator(self.target)
        assert evaluator.evaluate(self.candidate) == 0.0
        assert evaluator.is_natural is False

    def test_different_image_scores_higher(self):
        evaluator = PolygonImageEvaluator(self.target)
        other = self.factory.generate_random_candidate(random.Random(4))
        assert evaluator.evaluate(other) > 0.0

    def test_black_target_distance(self):
        black = Image.new('RGB', (4, 4), (0, 0, 0))
        white = ColouredPolygon((255, 255, 255, 255), ((0, 0), (3, 0), (3, 3), (0, 3)))
        evaluator = PolygonImageEvaluator(black)
        assert evaluator.evaluate((white,)) == pytest.approx(16 * (3 * 255 ** 2) ** 0.5)

    def test_reduced_resolution(self):
        large = Image.new('RGB', (400, 200))
        evaluator = PolygonImageEvaluator(large, max_evaluation_size=100)
        assert evaluator.scale == 0.25
        assert evaluator.canvas_size == (400, 200)
        assert evaluator.evaluate(()) == 0.0
