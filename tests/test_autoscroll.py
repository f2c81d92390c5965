import unittest

from noteboard.autoscroll import get_auto_scroll_speed


class TestAutoScroll(unittest.TestCase):
    def test_near_start_edge_scrolls_backwards(self) -> None:
        self.assertEqual(get_auto_scroll_speed(50, 0, 1000), -7.5)

    def test_near_end_edge_scrolls_forwards(self) -> None:
        self.assertEqual(get_auto_scroll_speed(950, 0, 1000), 7.5)

    def test_middle_of_container_is_still(self) -> None:
        self.assertEqual(get_auto_scroll_speed(500, 0, 1000), 0)
        # exactly threshold px away is outside the scroll zone
        self.assertEqual(get_auto_scroll_speed(100, 0, 1000), 0)
        self.assertEqual(get_auto_scroll_speed(900, 0, 1000), 0)

    def test_full_speed_at_and_past_edges(self) -> None:
        self.assertEqual(get_auto_scroll_speed(0, 0, 1000), -15)
        self.assertEqual(get_auto_scroll_speed(1000, 0, 1000), 15)
        self.assertEqual(get_auto_scroll_speed(-40, 0, 1000), -15)
        self.assertEqual(get_auto_scroll_speed(1200, 0, 1000), 15)

    def test_offset_container_and_custom_params(self) -> None:
        self.assertEqual(get_auto_scroll_speed(220, 200, 800, threshold=40, max_speed=10), -5.0)
        self.assertEqual(get_auto_scroll_speed(780, 200, 800, threshold=40, max_speed=10), 5.0)

    def test_narrow_container_start_edge_wins(self) -> None:
        # span 150 < 2 * threshold: 75 is near both edges
        self.assertEqual(get_auto_scroll_speed(75, 0, 150), -3.75)
        self.assertEqual(get_auto_scroll_speed(100, 0, 150), 7.5)


if __name__ == "__main__":
    unittest.main()
