from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

# timestamp | level | logger | message
_DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# The relay's own tree plus the loggers uvicorn writes server and access
# lines to. All of them share the handlers built below.
APP_LOGGER = "order_payment_relay"
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: Optional[Union[int, str]] = None) -> str:
    """
    Level name for `level` (int or str such as 'debug'), else LOG_LEVEL, else INFO.
    Unknown names fall back to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL") or "INFO"

    if isinstance(level, int):
        name = logging.getLevelName(level)
        return name if isinstance(name, str) and not name.startswith("Level ") else "INFO"

    name = level.strip().upper()
    if name == "WARN":
        name = "WARNING"
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def build_log_config(
    *,
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> Dict[str, Any]:
    """
    dictConfig for the relay and uvicorn: one format, console on stderr and/or a
    rotating file. Loggers outside these trees (and the root) are left alone.
    """
    handlers: Dict[str, Dict[str, Any]] = {}
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "relay",
            "stream": "ext://sys.stderr",
        }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "relay",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
            "delay": True,
        }

    lvl = resolve_level(level)
    names = list(handlers)
    loggers = {
        APP_LOGGER: {"handlers": names, "level": lvl, "propagate": False},
        "uvicorn": {"handlers": names, "level": lvl, "propagate": False},
        # children of "uvicorn" would double-log through the parent
        "uvicorn.error": {"handlers": [], "level": lvl, "propagate": True},
        "uvicorn.access": {"handlers": names, "level": lvl, "propagate": False},
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "relay": {"format": _DEFAULT_FMT, "datefmt": _DEFAULT_DATEFMT},
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def configure_logging(
    *,
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> logging.Logger:
    """Apply build_log_config() and return the relay's top-level logger.

    Calling it again replaces the previous handlers rather than adding to them.
    Pass `log_config=None` to uvicorn afterwards so it keeps this setup.
    """
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(
        build_log_config(level=level, log_file=log_file, console=console))
    return logging.getLogger(APP_LOGGER)
