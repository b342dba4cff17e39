import unittest

import numpy as np

from polytension.core.geometry import Point, PointArena, clamp01, rotate_coordinates
from polytension.core.morph import morph_factors, morph_points
from polytension.core.rng import SeededRandom
from polytension.core.tessellation import generate


class RotationTestCase(unittest.TestCase):

    def test_zero_angle_is_identity(self):
        for x, y in [(0.5, 0.1), (0.9, 0.75), (0.0, 1.0), (0.3, 0.3)]:
            nx, ny = rotate_coordinates(0.5, 0.5, x, y, 0)
            self.assertAlmostEqual(nx, x)
            self.assertAlmostEqual(ny, y)

    def test_quarter_turn(self):
        nx, ny = rotate_coordinates(0.5, 0.5, 0.9, 0.5, 90)
        self.assertAlmostEqual(nx, 0.5)
        self.assertAlmostEqual(ny, 0.1)

    def test_full_turn(self):
        nx, ny = rotate_coordinates(0.5, 0.5, 0.1, 0.75, 360)
        self.assertAlmostEqual(nx, 0.1)
        self.assertAlmostEqual(ny, 0.75)

    def test_center_is_fixed(self):
        self.assertEqual(rotate_coordinates(0.5, 0.5, 0.5, 0.5, 123.0), (0.5, 0.5))

    def test_browser_values(self):
        nx, ny = rotate_coordinates(0.5, 0.5, 0.9, 0.5, 345.8639093209058)
        self.assertAlmostEqual(nx, 0.8878873478003657, places=12)
        self.assertAlmostEqual(ny, 0.597690354776703, places=12)


class PointArenaTestCase(unittest.TestCase):

    def test_ids_start_at_one(self):
        arena = PointArena()
        self.assertEqual(arena.create(0.1, 0.2), 1)
        self.assertEqual(arena.create(0.3, 0.4), 2)
        self.assertEqual(arena[2], Point(0.3, 0.4, 2))
        self.assertEqual(list(arena.ids()), [1, 2])

    def test_growth_keeps_points(self):
        arena = PointArena(capacity=2)
        for i in range(100):
            arena.create(i / 100, 1 - i / 100)
        self.assertEqual(len(arena), 100)
        self.assertEqual(arena.coords(1), (0.0, 1.0))
        self.assertEqual(arena.coords(100), (0.99, 1 - 0.99))
        self.assertEqual(arena.xy.shape, (100, 2))

    def test_missing_id(self):
        arena = PointArena()
        arena.create(0.5, 0.5)
        with self.assertRaises(KeyError):
            arena[2]
        with self.assertRaises(KeyError):
            arena[0]

    def test_xy_is_live(self):
        arena = PointArena()
        arena.create(0.5, 0.5)
        arena.xy[0] = (0.25, 0.75)
        self.assertEqual(arena.coords(1), (0.25, 0.75))

    def test_clear(self):
        arena = PointArena()
        arena.create(0.5, 0.5)
        arena.clear()
        self.assertEqual(len(arena), 0)
        self.assertEqual(arena.create(0.1, 0.1), 1)

    def test_clamp01(self):
        self.assertEqual(clamp01(1.5), 1.0)
        self.assertEqual(clamp01(-0.5), 0.0)
        np.testing.assert_array_equal(clamp01(np.array([-1.0, 0.5, 2.0])), [0.0, 0.5, 1.0])


class MorphTestCase(unittest.TestCase):

    def test_matches_browser_frame(self):
        t = generate("test")
        t.morph()
        expected = [
            (0.8869798541860029, 0.5975720889705435),
            (0.11226233511978793, 0.4024622619338959),
            (0.597145810320666, 0.11200471386425802),
        ]
        for point_id, (x, y) in enumerate(expected, start=1):
            px, py = t.points.coords(point_id)
            self.assertAlmostEqual(px, x, places=12)
            self.assertAlmostEqual(py, y, places=12)
        self.assertEqual(t.rng.random(), 0.7812278314959258)

    def test_single_root_frame(self):
        t = generate("1700000000000")
        t.morph()
        x, y = t.points.coords(3)
        self.assertAlmostEqual(x, 0.5120982772204649, places=12)
        self.assertAlmostEqual(y, 0.028463566597126632, places=12)
        self.assertEqual(t.rng.random(), 0.8266323746647686)

    def test_one_draw_per_coordinate(self):
        t = generate("draws")
        before = t.rng.calls
        t.morph()
        self.assertEqual(t.rng.calls - before, 2 * len(t.points))

    def test_factor_order(self):
        rng = SeededRandom("order")
        draws = SeededRandom("order").take(4)
        factors = morph_factors(rng, 2, 0.01)
        self.assertAlmostEqual(factors[0, 0], draws[0] * 0.01 + 0.995)
        self.assertAlmostEqual(factors[0, 1], draws[1] * 0.01 + 0.995)
        self.assertAlmostEqual(factors[1, 0], draws[2] * 0.01 + 0.995)

    def test_points_stay_in_unit_square(self):
        arena = PointArena()
        arena.create(1.0, 1.0)
        arena.create(0.0, 0.0)
        arena.create(0.9999, 0.0001)
        rng = SeededRandom("clamp")
        for _ in range(200):
            morph_points(arena, rng, 0.5)
            self.assertTrue(np.all(arena.xy >= 0.0))
            self.assertTrue(np.all(arena.xy <= 1.0))

    def test_long_run_invariant(self):
        t = generate("long")
        for _ in range(300):
            t.morph()
        self.assertTrue(np.all((t.points.xy >= 0.0) & (t.points.xy <= 1.0)))

    def test_empty_arena(self):
        rng = SeededRandom("empty")
        morph_points(PointArena(), rng, 0.01)
        self.assertEqual(rng.calls, 0)


if __name__ == "__main__":
    unittest.main()
