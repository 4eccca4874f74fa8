# src/order_payment_relay/cli.py
from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from .config.logging_config import configure_logging
from .config.env import get_app_env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="order-payment-relay",
        description="Serve /api/orders and /api/orders/<id>/capture against the payment processor.",
    )
    p.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface to bind. Default: 0.0.0.0",
    )
    p.add_argument(
        "--port",
        type=int,
        default=None,
        help="Listening port. Overrides PORT from the environment (default 8888).",
    )
    p.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Explicit .env file. Default: nearest .env found upward from CWD.",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Default: LOG_LEVEL or INFO",
    )
    p.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file (rotated).",
    )
    p.add_argument(
        "--no-console",
        action="store_true",
        help="Disable console logging (file logging remains).",
    )
    p.add_argument(
        "--strict-env",
        action="store_true",
        help="Require PAYPAL_CLIENT_ID/SECRET to be present; otherwise exit 2.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger = configure_logging(
        level=args.log_level,
        console=not args.no_console,
        log_file=args.log_file,
    )

    try:
        env_cfg = get_app_env(args.env_file, strict=args.strict_env)
    except RuntimeError as e:
        logger.error("Environment error: %s", e)
        return 2

    if args.port is not None:
        env_cfg = replace(env_cfg, PORT=args.port)

    if not env_cfg.credentials.is_complete():
        logger.warning(
            "PAYPAL_CLIENT_ID/PAYPAL_CLIENT_SECRET not set; every order call will fail.")
    logger.info("Processor: %s (timeout=%s)",
                env_cfg.PAYPAL_BASE_URL, env_cfg.PAYPAL_HTTP_TIMEOUT)

    # Lazy imports to keep --help fast
    import uvicorn
    from .server.app import create_app

    app = create_app(env_cfg)
    logger.info("Server listening at http://localhost:%s/", env_cfg.PORT)
    # log_config=None: uvicorn keeps the handlers configure_logging installed
    uvicorn.run(app, host=args.host, port=env_cfg.PORT, log_config=None)
    return 0
