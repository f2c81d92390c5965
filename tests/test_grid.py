import math
import random
import unittest

from noteboard.models import Point, GridConfig, Breakpoint
from noteboard.grid import (DEFAULT_GRID_CONFIG, breakpoint_for_width, get_responsive_grid_size,
                            snap, snap_to_grid)


class FixedRandom:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class TestResponsiveGrid(unittest.TestCase):
    def test_default_tablet_width(self) -> None:
        self.assertEqual(get_responsive_grid_size(800), 35)

    def test_breakpoint_boundaries(self) -> None:
        cases = [
            (0, Breakpoint.MOBILE), (767, Breakpoint.MOBILE),
            (768, Breakpoint.TABLET), (1023, Breakpoint.TABLET),
            (1024, Breakpoint.DESKTOP), (1439, Breakpoint.DESKTOP),
            (1440, Breakpoint.LARGE), (3840, Breakpoint.LARGE),
        ]
        for width, expected in cases:
            with self.subTest(width=width):
                self.assertEqual(breakpoint_for_width(width), expected)
                self.assertEqual(get_responsive_grid_size(width),
                                 getattr(DEFAULT_GRID_CONFIG, expected))

    def test_custom_config(self) -> None:
        cfg = GridConfig(mobile=8, tablet=16, desktop=24, large=32)
        self.assertEqual(get_responsive_grid_size(500, cfg), 8)
        self.assertEqual(get_responsive_grid_size(1200, cfg), 24)
        self.assertEqual(get_responsive_grid_size(2000, cfg), 32)


class TestSnapToGrid(unittest.TestCase):
    def test_immediate_snap_is_exact(self) -> None:
        self.assertEqual(snap_to_grid(17, 33, 10, True), Point(20, 30))

    def test_immediate_snap_is_idempotent(self) -> None:
        for x, y, g in [(17, 33, 10), (123.4, 987.6, 35), (0.1, 59.9, 40)]:
            once = snap_to_grid(x, y, g, immediate=True)
            twice = snap_to_grid(once.x, once.y, g, immediate=True)
            self.assertEqual(once, twice)

    def test_negative_coordinates_clamp_to_zero(self) -> None:
        p = snap_to_grid(-12, -3, 10, immediate=True)
        self.assertEqual(p, Point(0, 0))

    def test_centered_random_source_gives_no_offset(self) -> None:
        self.assertEqual(snap_to_grid(43, 78, 40, rng=FixedRandom(0.5)), Point(40, 80))

    def test_jitter_stays_within_range(self) -> None:
        rng = random.Random(1234)
        g = 40
        half = math.floor(g * 0.15) / 2
        for _ in range(200):
            p = snap_to_grid(400, 400, g, rng=rng)
            self.assertLessEqual(abs(p.x - 400), half)
            self.assertLessEqual(abs(p.y - 400), half)

    def test_jitter_is_reproducible_with_seed(self) -> None:
        a = snap_to_grid(210, 330, 35, rng=random.Random(7))
        b = snap_to_grid(210, 330, 35, rng=random.Random(7))
        self.assertEqual(a, b)

    def test_jitter_never_goes_negative(self) -> None:
        p = snap_to_grid(0, 0, 40, rng=FixedRandom(0.0))
        self.assertEqual(p, Point(0, 0))

    def test_snap_helper(self) -> None:
        self.assertEqual(snap(14, 10), 10)
        self.assertEqual(snap(16, 10), 20)
        self.assertEqual(snap(-16, 10), -20)


if __name__ == "__main__":
    unittest.main()
