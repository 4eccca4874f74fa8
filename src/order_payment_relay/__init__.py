# src/order_payment_relay/__init__.py
from .api.orders import OrderClient, build_order_client
from .api.auth import TokenProvider
from .server.app import create_app

__all__ = [
    "OrderClient",
    "TokenProvider",
    "build_order_client",
    "create_app",
]
