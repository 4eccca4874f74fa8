from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote
import logging

from order_payment_relay.models import OrderResult
from .auth import TokenProvider
from .errors import InvalidOrderRequest, InvalidResponse, OrderCreateFailed
from .transport import RequestsTransport

CURRENCY_CODE = "USD"
INTENT = "CAPTURE"


def build_order_payload(data: Any) -> Dict[str, Any]:
    """Single purchase unit with the caller's cost used verbatim."""
    try:
        cost = data["product"]["cost"]
    except (KeyError, TypeError) as ex:
        raise InvalidOrderRequest("expected {'product': {'cost': ...}}") from ex

    return {
        "intent": INTENT,
        "purchase_units": [
            {
                "amount": {
                    "currency_code": CURRENCY_CODE,
                    "value": cost,
                },
            },
        ],
    }


class OrderClient:
    """Create and capture orders through the processor's Orders v2 API.

    create_order() raises OrderCreateFailed for any non-2xx answer, while
    capture_order() hands back whatever status and body the processor sent.
    """

    ORDERS_PATH = "/v2/checkout/orders"

    def __init__(
        self,
        tokens: TokenProvider,
        base_url: str,
        transport: Optional[RequestsTransport] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.tokens = tokens
        self.base_url = base_url.rstrip("/")
        self.transport = transport or tokens.transport
        self.logger: logging.Logger = logger or logging.getLogger(
            "order_payment_relay.api.orders"
        )

    def _headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

    def create_order(self, data: Any) -> OrderResult:
        payload = build_order_payload(data)
        access_token = self.tokens.generate_access_token()
        url = self.base_url + self.ORDERS_PATH

        self.logger.debug("POST %s request_body=%s", url, payload)
        resp = self.transport.post(
            url, headers=self._headers(access_token), json=payload)
        return self._handle_response(resp)

    def capture_order(self, order_id: str) -> OrderResult:
        access_token = self.tokens.generate_access_token()
        url = f"{self.base_url}{self.ORDERS_PATH}/{quote(order_id, safe='')}/capture"

        self.logger.debug("POST %s", url)
        resp = self.transport.post(
            url, headers=self._headers(access_token))

        try:
            body = resp.json()
        except ValueError as ex:
            raise InvalidResponse(resp.status_code, resp.text) from ex

        self.logger.info("Capture order_id=%s status=%s",
                         order_id, resp.status_code)
        return OrderResult(body=body, status=resp.status_code)

    def _handle_response(self, resp) -> OrderResult:
        if 200 <= resp.status_code < 300:
            try:
                body = resp.json()
            except ValueError as ex:
                raise InvalidResponse(resp.status_code, resp.text) from ex
            self.logger.info("Order created status=%s id=%s", resp.status_code,
                             body.get("id") if isinstance(body, dict) else None)
            return OrderResult(body=body, status=resp.status_code)

        raise OrderCreateFailed(resp.status_code, resp.text)


def build_order_client(cfg, transport: Optional[RequestsTransport] = None) -> OrderClient:
    """Wire a TokenProvider + OrderClient sharing one transport from EnvCfg."""
    transport = transport or RequestsTransport(timeout=cfg.PAYPAL_HTTP_TIMEOUT)
    tokens = TokenProvider(cfg.credentials, cfg.PAYPAL_BASE_URL, transport)
    return OrderClient(tokens, cfg.PAYPAL_BASE_URL, transport)
