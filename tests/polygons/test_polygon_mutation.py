"""
Tests for polygon mutations and the polygon evolution pipeline
"""
import random
from collections import Counter

import pytest

from poly_evo.evolution.components import GenerationCount, create_evolution_engine
from poly_evo.evolution.components.strategies import ListOperator
from poly_evo.polygons import (
    ColouredPolygon, PolygonImageEvaluator, PolygonImageFactory, create_evolution_pipeline, render
)
from poly_evo.polygons.mutation import (
    AddPolygonMutation, AddVertexMutation, MovePolygonMutation, MoveVertexMutation,
    PolygonColourMutation, RemovePolygonMutation, RemoveVertexMutation
)

from conftest import RecordingObserver

CANVAS = (30, 20)


@pytest.fixture
def factory():
    return PolygonImageFactory(CANVAS, polygon_count=3, vertex_count=4)


@pytest.fixture
def image(factory):
    return factory.generate_random_candidate(random.Random(0))


class TestImageMutations:

    def test_add_polygon(self, factory, image):
        mutated = AddPolygonMutation(1.0, factory).mutate(image, random.Random(1))
        assert len(mutated) == 4
        assert Counter(image) - Counter(mutated) == Counter()

    def test_add_polygon_respects_limit(self, factory, image):
        assert AddPolygonMutation(1.0, factory, max_polygons=3).mutate(image, random.Random(1)) == image

    def test_remove_polygon(self, image):
        mutated = RemovePolygonMutation(1.0).mutate(image, random.Random(1))
        assert len(mutated) == 2
        assert RemovePolygonMutation(1.0).mutate(mutated, random.Random(1)) == mutated

    def test_move_polygon_keeps_polygons(self, image):
        rng = random.Random(2)
        mutated = image
        for _ in range(10):
            mutated = MovePolygonMutation(1.0).mutate(mutated, rng)
        assert Counter(mutated) == Counter(image)
        assert isinstance(mutated, tuple)


class TestPolygonMutations:

    def test_add_and_remove_vertex(self, image):
        polygon = image[0]
        grown = AddVertexMutation(1.0, CANVAS).mutate(polygon, random.Random(0))
        assert len(grown.vertices) == 5
        assert AddVertexMutation(1.0, CANVAS, max_vertices=4).mutate(polygon, random.Random(0)) == polygon

        shrunk = RemoveVertexMutation(1.0).mutate(polygon, random.Random(0))
        assert len(shrunk.vertices) == 3
        assert RemoveVertexMutation(1.0).mutate(shrunk, random.Random(0)) == shrunk

    def test_move_vertex_stays_on_canvas(self):
        corner = ColouredPolygon((0, 0, 0, 0), ((0, 0), (29, 0), (29, 19)))
        rng = random.Random(5)
        mutation = MoveVertexMutation(1.0, CANVAS, sigma=50.0)
        for _ in range(50):
            corner = mutation.mutate(corner, rng)
            assert all(0 <= x < 30 and 0 <= y < 20 for x, y in corner.vertices)

    def test_colour_is_clamped(self):
        polygon = ColouredPolygon((0, 255, 128, 0), ((0, 0), (1, 0), (0, 1)))
        rng = random.Random(6)
        mutation = PolygonColourMutation(1.0, sigma=200.0)
        for _ in range(50):
            polygon = mutation.mutate(polygon, rng)
            assert all(0 <= c <= 255 for c in polygon.colour)

    def test_list_operator_applies_to_every_polygon(self, image):
        mutated = ListOperator(PolygonColourMutation(1.0)).apply([image], random.Random(0))[0]
        assert isinstance(mutated, tuple)
        assert len(mutated) == len(image)
        assert all(a.vertices == b.vertices for a, b in zip(mutated, image))


class TestPolygonPipeline:

    def test_unknown_probability_rejected(self, factory):
        with pytest.raises(ValueError):
            create_evolution_pipeline(factory, {'teleport': 0.5})

    def test_offspring_are_valid_images(self, factory):
        probabilities = {key: 1.0 for key in ['add_polygon', 'move_polygon', 'add_vertex',
                                              'move_vertex', 'change_colour']}
        pipeline = create_evolution_pipeline(factory, probabilities, max_polygons=6, max_vertices=6)
        rng = random.Random(0)
        population = factory.generate_initial_population(6, rng)
        for _ in range(5):
            population = pipeline.apply(population, rng)

        assert len(population) == 6
        for candidate in population:
            assert isinstance(candidate, tuple)
            assert 2 <= len(candidate) <= 6
            for polygon in candidate:
                assert 3 <= len(polygon.vertices) <= 6

    def test_short_run_improves_or_holds(self, factory):
        target = render(PolygonImageFactory(CANVAS, polygon_count=5).generate_random_candidate(random.Random(9)),
                        CANVAS)
        evaluator = PolygonImageEvaluator(target)
        config = {
            'evolution': {'population_size': 6, 'elite_count': 1, 'seed': 11, 'max_workers': 2},
            'selection': {'method': 'tournament', 'parameters': {}},
        }
        engine = create_evolution_engine(config, factory, create_evolution_pipeline(factory), evaluator)
        observer = RecordingObserver()
        engine.add_observer(observer)
        best = engine.evolve(6, 1, GenerationCount(8))

        history = [d.best_fitness for d in observer.updates]
        assert all(later <= earlier for earlier, later in zip(history, history[1:]))
        assert evaluator.evaluate(best) == history[-1]
