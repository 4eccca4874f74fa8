import json

import pytest

from order_payment_relay.api.auth import TokenProvider
from order_payment_relay.api.orders import OrderClient
from order_payment_relay.models import Credentials

BASE = "https://processor.test"

_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code, body=None, text=None):
        self.status_code = status_code
        self._body = body
        if text is None:
            text = "" if body is _NO_JSON or body is None else json.dumps(body)
        self.text = text

    def json(self):
        if self._body is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeTransport:
    """Records every post() and answers from a queue (exceptions are raised)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if not self.responses:
            raise AssertionError(f"unexpected POST {url}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    def close(self):
        self.closed = True


def token_ok(token="A21AA-token"):
    return FakeResponse(200, {"access_token": token, "token_type": "Bearer", "expires_in": 32400})


@pytest.fixture
def no_json():
    return _NO_JSON


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def ok_token():
    return token_ok


@pytest.fixture
def creds():
    return Credentials("client-id", "client-secret")


@pytest.fixture
def make_client(creds):
    """OrderClient over a FakeTransport queue; the token call is prepended."""

    def _make(*responses, credentials=None, with_token=True):
        queue = ((token_ok(),) if with_token else ()) + responses
        transport = FakeTransport(*queue)
        tokens = TokenProvider(credentials or creds, BASE, transport)
        return OrderClient(tokens, BASE, transport), transport

    return _make


@pytest.fixture
def reset_relay_logging():
    """Undo configure_logging() so later tests see default propagation."""
    import logging

    from order_payment_relay.config.logging_config import APP_LOGGER, SERVER_LOGGERS

    yield
    for name in (APP_LOGGER, *SERVER_LOGGERS):
        lg = logging.getLogger(name)
        for h in list(lg.handlers):
            lg.removeHandler(h)
            h.close()
        lg.propagate = True
        lg.setLevel(logging.NOTSET)
