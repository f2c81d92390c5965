import unittest

from noteboard.models import Point
from noteboard.geometry import calculate_distance, is_click_not_drag


class TestGeometry(unittest.TestCase):
    def test_distance_is_symmetric_and_zero_on_self(self) -> None:
        a, b = Point(1.5, -2.0), Point(-4.0, 7.25)
        self.assertEqual(calculate_distance(a, b), calculate_distance(b, a))
        self.assertEqual(calculate_distance(a, a), 0)

    def test_distance_three_four_five(self) -> None:
        self.assertEqual(calculate_distance(Point(0, 0), Point(3, 4)), 5.0)

    def test_click_threshold_is_exclusive(self) -> None:
        # distance exactly 5 counts as a drag
        self.assertFalse(is_click_not_drag(Point(0, 0), Point(3, 4)))
        self.assertTrue(is_click_not_drag(Point(0, 0), Point(4.9, 0)))
        self.assertTrue(is_click_not_drag(Point(10, 10), Point(10, 10)))

    def test_click_custom_threshold(self) -> None:
        self.assertTrue(is_click_not_drag(Point(0, 0), Point(3, 4), threshold=6))
        self.assertFalse(is_click_not_drag(Point(0, 0), Point(1, 0), threshold=1))


if __name__ == "__main__":
    unittest.main()
