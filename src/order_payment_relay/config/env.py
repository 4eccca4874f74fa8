# src/order_payment_relay/config/env.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Tuple, TypeVar

from dotenv import find_dotenv, load_dotenv

from order_payment_relay.models import EnvCfg
from order_payment_relay.models.env_cfg import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PORT,
    SANDBOX_BASE_URL,
)

logger = logging.getLogger("order_payment_relay.config")

T = TypeVar("T")


class EnvError(RuntimeError):
    """Raised when required environment variables are missing or malformed."""


REQUIRED_KEYS: Tuple[str, ...] = (
    "PAYPAL_CLIENT_ID",
    "PAYPAL_CLIENT_SECRET",
)


def _load_dotenv_file(dotenv_path: Path | str | None) -> Optional[Path]:
    """Load `dotenv_path`, or the nearest .env above CWD, without overriding
    variables already set in the process. Returns the file used, if any."""
    if dotenv_path is None:
        found = find_dotenv(filename=".env", usecwd=True)
        if not found:
            return None
        dotenv_path = found

    path = Path(dotenv_path)
    if not path.is_file():
        return None

    load_dotenv(dotenv_path=path, override=False)
    return path.resolve()


def _setting(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise EnvError(f"Invalid value for {name}: {raw!r}") from e


def _timeout(raw: str) -> Optional[float]:
    # "0"/"none" disable the deadline entirely
    if raw.lower() in ("0", "none", "off"):
        return None
    value = float(raw)
    if value < 0:
        raise ValueError(raw)
    return value


def get_app_env(dotenv_path: Path | str | None = None, *, strict: bool = False) -> EnvCfg:
    """
    Build the immutable process config from the environment.

    - `dotenv_path` names a .env file to load first; None searches upward from
      CWD. Variables already in the process env win over the file.
    - Non-strict by default: missing credentials become empty strings and the
      failure surfaces per call as MissingCredentials. `strict=True` raises
      EnvError instead.
    """
    loaded = _load_dotenv_file(dotenv_path)
    if loaded is not None:
        logger.debug("Loaded environment file %s", loaded)

    if strict:
        missing = [k for k in REQUIRED_KEYS if not os.getenv(k)]
        if missing:
            raise EnvError(
                f"Missing required environment variable(s): {', '.join(missing)}")

    return EnvCfg(
        PAYPAL_CLIENT_ID=_setting("PAYPAL_CLIENT_ID", "", str),
        PAYPAL_CLIENT_SECRET=_setting("PAYPAL_CLIENT_SECRET", "", str),
        PAYPAL_BASE_URL=_setting("PAYPAL_BASE_URL", SANDBOX_BASE_URL, str),
        PORT=_setting("PORT", DEFAULT_PORT, int),
        PAYPAL_HTTP_TIMEOUT=_setting(
            "PAYPAL_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, _timeout),
    )


__all__ = [
    "EnvError",
    "REQUIRED_KEYS",
    "get_app_env",
]
