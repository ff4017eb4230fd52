from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Optional

VERBOSE_FMT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(level: str = "INFO", log_dir: Optional[str | Path] = None) -> dict:
    """Return a ``dictConfig`` mapping: console always, rotating files when ``log_dir`` is set."""
    level = (level or "INFO").upper()
    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "verbose",
        },
    }

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "verbose",
            "filename": str(log_dir / "app.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }
        # ERROR+ only, so store failures are easy to find.
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "verbose",
            "filename": str(log_dir / "error.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {"format": VERBOSE_FMT, "datefmt": DATE_FMT},
        },
        "handlers": handlers,
        "loggers": {
            "src.signature_attendance": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
            "werkzeug": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def configure_logging(level: str = "INFO", log_dir: Optional[str | Path] = None) -> None:
    logging.config.dictConfig(build_logging_config(level, log_dir))
