from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional

_LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ROOT_NAME: Final[str] = "noteboard"
# Set on every handler configure_root_logging attaches.
_HANDLER_MARK: Final[str] = "_noteboard_handler"


def data_dir() -> Path:
    """Directory for logs, autosave and other per-user files."""
    base = os.environ.get("NOTEBOARD_HOME")
    return Path(base) if base else Path.home() / ".noteboard"


def _log_file_path() -> Path:
    return data_dir() / "log" / "app.log"


def _attach(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)


def configure_root_logging(*, level: int = logging.INFO) -> None:
    """Configure root logging (idempotent).

    Safe to call multiple times; it won't add duplicate handlers, even when
    the log file could not be opened on the first call.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if any(getattr(h, _HANDLER_MARK, False) for h in root.handlers):
        return

    _attach(root, logging.StreamHandler(), level)

    try:
        log_path = _log_file_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError as exc:
        # A read-only home must not block app startup.
        logging.getLogger(_ROOT_NAME).warning("file logging disabled: %s", exc)
        return
    _attach(root, handler, level)


def get_logger(name: str, *, level: Optional[int] = None) -> logging.Logger:
    """Get a component logger under the ``noteboard`` namespace."""

    logger = logging.getLogger(f"{_ROOT_NAME}.{name}")
    if level is not None:
        logger.setLevel(level)
    return logger
