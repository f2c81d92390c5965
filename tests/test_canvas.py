import unittest

from noteboard.models import Point, Bounds, NoteProps
from noteboard.canvas import calculate_canvas_size


class TestCanvasSize(unittest.TestCase):
    def test_empty_board_uses_minimums(self) -> None:
        self.assertEqual(calculate_canvas_size([]), Bounds(1200, 800))
        self.assertEqual(calculate_canvas_size([], min_width=10, min_height=20), Bounds(10, 20))

    def test_far_item_grows_canvas(self) -> None:
        items = [{"position": {"x": 1000, "y": 700}}]
        self.assertEqual(calculate_canvas_size(items), Bounds(1600, 1300))

    def test_near_items_keep_minimums(self) -> None:
        items = [NoteProps(position=Point(10, 10)), NoteProps(position=Point(200, 50))]
        self.assertEqual(calculate_canvas_size(items), Bounds(1200, 800))

    def test_axes_are_independent(self) -> None:
        items = [NoteProps(position=Point(900, 0)), NoteProps(position=Point(0, 100))]
        # right edge 1300 + 200 > 1200; bottom edge 500 + 200 < 800
        self.assertEqual(calculate_canvas_size(items), Bounds(1500, 800))

    def test_custom_item_size_and_padding(self) -> None:
        items = [{"position": Point(100, 100)}]
        b = calculate_canvas_size(items, item_width=50, item_height=60,
                                  min_width=0, min_height=0, padding=10)
        self.assertEqual(b, Bounds(160, 170))

    def test_adding_items_never_shrinks(self) -> None:
        items = [NoteProps(position=Point(1500, 900))]
        before = calculate_canvas_size(items)
        items.append(NoteProps(position=Point(100, 100)))
        after = calculate_canvas_size(items)
        self.assertEqual(before, after)
        items.append(NoteProps(position=Point(2000, 50)))
        grown = calculate_canvas_size(items)
        self.assertGreaterEqual(grown.width, after.width)
        self.assertGreaterEqual(grown.height, after.height)


if __name__ == "__main__":
    unittest.main()
