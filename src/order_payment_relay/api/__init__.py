from .auth import TokenProvider
from .orders import OrderClient, build_order_client, build_order_payload
from .transport import RequestsTransport

__all__ = [
    "TokenProvider",
    "OrderClient",
    "RequestsTransport",
    "build_order_client",
    "build_order_payload",
]
