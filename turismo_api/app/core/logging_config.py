"""
Logging setup shared by the API and its launcher.

``build_logging_config`` describes the whole setup as a ``dictConfig``
mapping: one formatter, a console handler, an optional file handler,
and uvicorn's loggers routed through those same handlers so request
lines, store errors and startup messages share one format and one log
file.  ``setup_logging`` applies it once per process.

Modules log through ``logging.getLogger(__name__)``; the launcher
passes ``log_config=None`` to uvicorn so its own defaults do not
replace this configuration.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_configured = False


def _level_name(level: str) -> str:
    name = str(level).upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def build_logging_config(level: str = "INFO", logfile: Optional[str] = None) -> Dict[str, Any]:
    """Return the ``logging.config.dictConfig`` mapping for ``level``/``logfile``.

    Unknown level names fall back to ``INFO``.  A relative ``logfile``
    resolves against the working directory.
    """
    level_name = _level_name(level)
    handler_names: List[str] = ["console"]
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }
    if logfile:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(Path(logfile).resolve()),
            "encoding": "utf-8",
        }
        handler_names.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            # uvicorn.error propagates to uvicorn, so only the parent and
            # the access logger carry handlers.
            "uvicorn": {"handlers": handler_names, "level": level_name, "propagate": False},
            "uvicorn.error": {"level": level_name},
            "uvicorn.access": {"handlers": handler_names, "level": level_name, "propagate": False},
        },
        "root": {"handlers": handler_names, "level": level_name},
    }


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, force: bool = False) -> None:
    """Configure logging for the API process.

    The first call wins, and so does any configuration another tool
    (a test runner, an embedding application) already attached to the
    root logger.  Later calls are ignored unless ``force`` is set.
    Missing parent directories of ``logfile`` are created.
    """
    global _configured
    if not force and (_configured or logging.getLogger().handlers):
        return

    if logfile:
        Path(logfile).resolve().parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(level, logfile))
    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", _level_name(level))
