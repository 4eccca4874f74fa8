import pytest

from order_payment_relay.api.errors import (
    AuthenticationFailed,
    InvalidOrderRequest,
    InvalidResponse,
    MissingCredentials,
    OrderCreateFailed,
)
from order_payment_relay.api.orders import build_order_client, build_order_payload
from order_payment_relay.models import Credentials, EnvCfg, OrderResult


def test_build_order_payload_uses_cost_verbatim():
    payload = build_order_payload({"product": {"cost": "10.00"}})
    assert payload == {
        "intent": "CAPTURE",
        "purchase_units": [
            {"amount": {"currency_code": "USD", "value": "10.00"}},
        ],
    }


@pytest.mark.parametrize(
    "data",
    [None, {}, {"product": {}}, {"product": "10.00"}, ["10.00"]],
)
def test_build_order_payload_rejects_missing_cost(data):
    with pytest.raises(InvalidOrderRequest):
        build_order_payload(data)


def test_create_order_success_returns_body_and_status(make_client, fake_response):
    client, transport = make_client(fake_response(201, {"id": "O1"}))

    result = client.create_order({"product": {"cost": "10.00"}})

    assert result == OrderResult(body={"id": "O1"}, status=201)

    url, kwargs = transport.calls[1]
    assert url == "https://processor.test/v2/checkout/orders"
    assert kwargs["headers"] == {
        "Content-Type": "application/json",
        "Authorization": "Bearer A21AA-token",
    }
    assert kwargs["json"]["purchase_units"][0]["amount"]["value"] == "10.00"


def test_create_order_non_2xx_raises_with_raw_text(make_client, fake_response):
    client, _ = make_client(fake_response(
        400, text='{"name":"INVALID_REQUEST"}'))

    with pytest.raises(OrderCreateFailed) as e:
        client.create_order({"product": {"cost": "-1"}})

    assert e.value.status == 400
    assert e.value.body == '{"name":"INVALID_REQUEST"}'


def test_create_order_malformed_request_skips_network(make_client):
    client, transport = make_client(with_token=False)

    with pytest.raises(InvalidOrderRequest):
        client.create_order({"product": {"price": "1"}})

    assert transport.calls == []


def test_create_order_2xx_with_non_json_body(make_client, fake_response, no_json):
    client, _ = make_client(fake_response(201, no_json, text="ok"))

    with pytest.raises(InvalidResponse):
        client.create_order({"product": {"cost": "1.00"}})


def test_create_order_missing_credentials(make_client):
    client, transport = make_client(
        with_token=False, credentials=Credentials("", ""))

    with pytest.raises(MissingCredentials):
        client.create_order({"product": {"cost": "1.00"}})
    assert transport.calls == []


def test_capture_order_success(make_client, fake_response):
    client, transport = make_client(
        fake_response(201, {"id": "O1", "status": "COMPLETED"}))

    result = client.capture_order("O1")

    assert result.status == 201
    assert result.body["status"] == "COMPLETED"
    url, kwargs = transport.calls[1]
    assert url == "https://processor.test/v2/checkout/orders/O1/capture"
    assert kwargs["headers"]["Authorization"] == "Bearer A21AA-token"
    assert "json" not in kwargs


def test_capture_order_escapes_order_id(make_client, fake_response):
    client, transport = make_client(fake_response(201, {"id": "A?x=1/B"}))

    client.capture_order("A?x=1/B")

    assert transport.calls[1][0] == \
        "https://processor.test/v2/checkout/orders/A%3Fx%3D1%2FB/capture"


def test_capture_order_relays_processor_failure(make_client, fake_response):
    client, _ = make_client(fake_response(422, {"error": "DECLINED"}))

    result = client.capture_order("O1")

    assert result == OrderResult(body={"error": "DECLINED"}, status=422)


def test_capture_order_non_json_body_raises(make_client, fake_response, no_json):
    client, _ = make_client(fake_response(502, no_json, text="Bad Gateway"))

    with pytest.raises(InvalidResponse) as e:
        client.capture_order("O1")
    assert e.value.status == 502


def test_each_operation_fetches_its_own_token(make_client, fake_response, ok_token):
    client, transport = make_client(
        fake_response(201, {"id": "O1"}),
        ok_token("second"),
        fake_response(201, {"id": "O1", "status": "COMPLETED"}),
    )

    client.create_order({"product": {"cost": "5.00"}})
    client.capture_order("O1")

    token_calls = [u for u, _ in transport.calls if u.endswith("/v1/oauth2/token")]
    assert len(token_calls) == 2
    assert transport.calls[3][1]["headers"]["Authorization"] == "Bearer second"


def test_auth_failure_stops_before_order_call(make_client, fake_response):
    client, transport = make_client(
        fake_response(401, {"error_description": "nope"}), with_token=False)

    with pytest.raises(AuthenticationFailed):
        client.capture_order("O1")
    assert len(transport.calls) == 1


def test_build_order_client_wires_config():
    cfg = EnvCfg(PAYPAL_CLIENT_ID="id", PAYPAL_CLIENT_SECRET="secret",
                 PAYPAL_BASE_URL="https://api-m.paypal.com", PAYPAL_HTTP_TIMEOUT=5.0)

    client = build_order_client(cfg)

    assert client.base_url == "https://api-m.paypal.com"
    assert client.tokens.credentials == Credentials("id", "secret")
    assert client.transport is client.tokens.transport
    assert client.transport.timeout == 5.0
