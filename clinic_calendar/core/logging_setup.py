from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from clinic_calendar.core.paths import app_dir

# Fixed override; None resolves under app_dir() at call time.
LOG_DIR: Path | None = None
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def build_log_handlers(log_dir: Path | None = None) -> list[logging.Handler]:
    if log_dir is not None:
        target = Path(log_dir)
    elif LOG_DIR is not None:
        target = LOG_DIR
    else:
        target = app_dir() / "logs"
    target.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        target / "app.log", maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    crash_handler = RotatingFileHandler(
        target / "crash.log",
        maxBytes=1_000_000,
        backupCount=2,
        encoding="utf-8",
    )
    crash_handler.setLevel(logging.ERROR)
    crash_handler.setFormatter(formatter)
    return [file_handler, crash_handler]


def setup_logging(
    level: int | str | None = None, log_dir: Path | None = None
) -> None:
    """Install the rotating file handlers on the root logger.

    Meant to be called once by the host application; importing the
    package never touches logging configuration.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level if level is not None else logging.INFO,
        handlers=build_log_handlers(log_dir),
    )
