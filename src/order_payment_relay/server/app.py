"""
FastAPI front end: two stateless routes relaying to the OrderClient.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_payment_relay.api.orders import OrderClient, build_order_client
from order_payment_relay.models import EnvCfg, OrderResult

logger = logging.getLogger("order_payment_relay.server")

CREATE_FAILED = {"error": "Failed to create order."}
CAPTURE_FAILED = {"error": "Failed to capture order."}

router = APIRouter()


def _relay(result: OrderResult) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=result.body)


def _log_failure(message: str, error: Exception) -> None:
    kind = getattr(error, "kind", None)
    # unexpected exceptions get a traceback; ProcessorError messages are enough
    logger.error("%s (kind=%s): %s", message,
                 kind.value if kind is not None else type(error).__name__,
                 error, exc_info=kind is None)


@router.post("/api/orders")
async def create_order(request: Request) -> JSONResponse:
    client: OrderClient = request.app.state.order_client
    data: Any = None
    try:
        data = await request.json()
        result = await asyncio.to_thread(client.create_order, data)
    except Exception as e:
        logger.info("REQUEST BODY %s", data)
        _log_failure("Failed to create order", e)
        return JSONResponse(status_code=500, content=CREATE_FAILED)
    return _relay(result)


@router.post("/api/orders/{orderID}/capture")
async def capture_order(request: Request) -> JSONResponse:
    client: OrderClient = request.app.state.order_client
    order_id = request.path_params["orderID"]
    try:
        logger.info("Capturing order %s", order_id)
        result = await asyncio.to_thread(client.capture_order, order_id)
    except Exception as e:
        _log_failure("Failed to capture order", e)
        return JSONResponse(status_code=500, content=CAPTURE_FAILED)
    return _relay(result)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    logger.info("Shutting down; closing processor transport")
    app.state.order_client.transport.close()


def create_app(cfg: Optional[EnvCfg] = None, *, order_client: Optional[OrderClient] = None) -> FastAPI:
    """Build the application.

    Tests pass `order_client` directly; otherwise one is wired from `cfg`
    (defaults to an all-default EnvCfg, i.e. the sandbox with no credentials).
    """
    app = FastAPI(
        title="Order Payment Relay",
        description="Creates and captures processor orders on behalf of a checkout page",
        version="0.1.0",
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    app.state.order_client = order_client or build_order_client(cfg or EnvCfg())
    app.include_router(router)
    return app
