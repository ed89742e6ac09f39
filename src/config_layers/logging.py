from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from config_layers.schema import setting

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass
class FileRotationSettings:
    """Daily rotation, as done by TimedRotatingFileHandler."""

    backup_count: int = setting("5", zero=0)


@dataclass
class FileLoggingSettings:
    path: str = setting("", zero="", help="log file path; empty disables file logging")
    rotation: FileRotationSettings = field(default_factory=FileRotationSettings)


@dataclass
class LoggingSettings:
    level: str = setting("WARNING", zero="")
    file: FileLoggingSettings = field(default_factory=FileLoggingSettings)


def init_logging(settings: LoggingSettings) -> None:
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {settings.level}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file.path:
        path = Path(settings.file.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                path,
                when="midnight",
                backupCount=settings.file.rotation.backup_count,
                encoding="utf-8",
            )
        )

    formatter = logging.Formatter(_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
