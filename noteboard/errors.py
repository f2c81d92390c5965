from __future__ import annotations

from .logging import get_logger


class NoteBoardError(Exception):
    """Base class for board-level failures."""


class BoardFileError(NoteBoardError):
    """A board file could not be read, written or parsed."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


def report_exception(exc: BaseException, *, where: str, logger_name: str = "errors") -> None:
    """Log an exception with its traceback.

    Must be called from inside the ``except`` block handling ``exc``.
    """
    get_logger(logger_name).exception("%s: %s", where, exc)
