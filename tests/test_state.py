import json
import tempfile
import unittest
from pathlib import Path

from noteboard.errors import BoardFileError
from noteboard.models import NoteProps, Point
from noteboard.state import load_board_file, note_to_data, notes_from_data, save_board_file


class TestBoardDocument(unittest.TestCase):
    def test_note_fields_survive_a_document(self) -> None:
        props = NoteProps(id="n1", title="Site visit", content="Bring drawings",
                          color="blue", position=Point(120, 80),
                          created_at="2024-01-01T00:00:00+00:00",
                          updated_at="2024-01-02T00:00:00+00:00")
        parsed = notes_from_data({"notes": [note_to_data(props)]})
        self.assertEqual(parsed, [props])

    def test_missing_fields_get_defaults(self) -> None:
        (note,) = notes_from_data({"notes": [{"id": "x", "x": "15", "y": 30}]})
        self.assertEqual(note.id, "x")
        self.assertEqual(note.title, "New Note")
        self.assertEqual(note.color, "yellow")
        self.assertEqual(note.position, Point(15, 30))
        self.assertEqual(note.updated_at, note.created_at)

    def test_bad_entries_are_tolerated(self) -> None:
        notes = notes_from_data({"notes": ["junk", {"id": "a", "x": "left"}]})
        self.assertEqual(len(notes), 1)
        self.assertEqual(notes[0].position, Point(0, 0))

    def test_non_object_document_is_rejected(self) -> None:
        with self.assertRaises(BoardFileError):
            notes_from_data([1, 2, 3])

    def test_document_without_notes_is_empty(self) -> None:
        self.assertEqual(notes_from_data({"canvas": {"w": 10}}), [])


class TestBoardFiles(unittest.TestCase):
    def test_save_then_load(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = str(Path(td) / "board.json")
            data = {"canvas": {"w": 1200, "h": 800, "grid": 40},
                    "notes": [note_to_data(NoteProps(id="a", title="Ünïcode"))]}
            save_board_file(path, data)
            self.assertEqual(load_board_file(path), data)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(BoardFileError) as ctx:
                load_board_file(str(Path(td) / "nope.json"))
            self.assertIn("nope.json", str(ctx.exception))

    def test_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "bad.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(BoardFileError):
                load_board_file(str(path))

    def test_json_array_is_not_a_board(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "list.json"
            path.write_text(json.dumps([]), encoding="utf-8")
            with self.assertRaises(BoardFileError):
                load_board_file(str(path))

    def test_save_into_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(BoardFileError):
                save_board_file(str(Path(td) / "missing" / "board.json"), {})


if __name__ == "__main__":
    unittest.main()
