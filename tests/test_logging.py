import logging
import os
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest import mock

from noteboard.errors import BoardFileError, report_exception
from noteboard.logging import configure_root_logging, data_dir, get_logger


class TestRootLogging(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.addCleanup(self._td.cleanup)
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        def restore():
            for h in root.handlers:
                if h not in saved_handlers:
                    h.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        self.addCleanup(restore)

    def _ours(self):
        return [h for h in logging.getLogger().handlers if getattr(h, "_noteboard_handler", False)]

    def test_repeated_calls_add_handlers_once(self) -> None:
        with mock.patch.dict(os.environ, {"NOTEBOARD_HOME": self._td.name}):
            configure_root_logging()
            configure_root_logging()
        ours = self._ours()
        self.assertEqual(len(ours), 2)
        files = [h for h in ours if isinstance(h, RotatingFileHandler)]
        self.assertEqual(len(files), 1)
        self.assertEqual(Path(files[0].baseFilename), Path(self._td.name) / "log" / "app.log")

    def test_console_only_setup_is_also_idempotent(self) -> None:
        not_a_dir = Path(self._td.name) / "plain-file"
        not_a_dir.write_text("x", encoding="utf-8")
        with mock.patch.dict(os.environ, {"NOTEBOARD_HOME": str(not_a_dir)}):
            with self.assertLogs("noteboard", level="WARNING") as cm:
                configure_root_logging()
            configure_root_logging()
        self.assertIn("file logging disabled", cm.output[0])
        ours = self._ours()
        self.assertEqual(len(ours), 1)
        self.assertNotIsInstance(ours[0], RotatingFileHandler)

    def test_data_dir_follows_environment(self) -> None:
        with mock.patch.dict(os.environ, {"NOTEBOARD_HOME": self._td.name}):
            self.assertEqual(data_dir(), Path(self._td.name))

    def test_component_loggers_share_namespace(self) -> None:
        self.assertEqual(get_logger("scene").name, "noteboard.scene")


class TestReportException(unittest.TestCase):
    def test_logs_traceback(self) -> None:
        try:
            raise BoardFileError("bad json", "/tmp/board.json")
        except BoardFileError as e:
            with self.assertLogs("noteboard.errors", level="ERROR") as cm:
                report_exception(e, where="open board")
        self.assertEqual(len(cm.records), 1)
        rec = cm.records[0]
        self.assertIn("open board: /tmp/board.json: bad json", rec.getMessage())
        self.assertIsNotNone(rec.exc_info)

    def test_custom_logger(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError as e:
            with self.assertLogs("noteboard.app", level="ERROR"):
                report_exception(e, where="startup", logger_name="app")


if __name__ == "__main__":
    unittest.main()
