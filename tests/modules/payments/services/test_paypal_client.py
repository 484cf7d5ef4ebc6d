# -*- coding: utf-8 -*-
"""
tests/modules/payments/services/test_paypal_client.py

Cliente PayPal sobre httpx.MockTransport: token cacheado, órdenes,
capturas, verificación de firmas y reintentos transitorios.

Autor: CourseHub
Fecha: 19/10/2026
"""
import json
from decimal import Decimal

import httpx
import pytest

from app.modules.payments.services.paypal_client import PayPalAPIError, PayPalClient
from app.shared.config.settings_payments import PaymentsSettings

SIGNATURE_HEADERS = {
    "paypal-auth-algo": "SHA256withRSA",
    "paypal-cert-url": "https://api.paypal.com/cert.pem",
    "paypal-transmission-id": "T-1",
    "paypal-transmission-sig": "sig",
    "paypal-transmission-time": "2026-10-19T00:00:00Z",
}


class PayPalStub:
    """Responde como la API de PayPal y registra las peticiones."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_calls = 0
        self.order_statuses: list[int] = []
        self.verification_status = "SUCCESS"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/v1/oauth2/token":
            self.token_calls += 1
            return httpx.Response(200, json={"access_token": f"TOKEN{self.token_calls}", "expires_in": 32400})

        if path == "/v2/checkout/orders":
            status = self.order_statuses.pop(0) if self.order_statuses else 201
            if status != 201:
                return httpx.Response(status, json={"name": "ERROR"})
            return httpx.Response(
                201,
                json={
                    "id": "ORDER1",
                    "status": "CREATED",
                    "links": [
                        {"rel": "self", "href": "https://api-m.sandbox.paypal.com/v2/checkout/orders/ORDER1"},
                        {"rel": "approve", "href": "https://www.sandbox.paypal.com/checkoutnow?token=ORDER1"},
                    ],
                },
            )

        if path == "/v2/checkout/orders/ORDER1/capture":
            return httpx.Response(
                201,
                json={
                    "id": "ORDER1",
                    "status": "COMPLETED",
                    "purchase_units": [
                        {
                            "custom_id": "user_42_course_7",
                            "payments": {
                                "captures": [
                                    {
                                        "id": "CAP123",
                                        "status": "COMPLETED",
                                        "amount": {"value": "19.99", "currency_code": "usd"},
                                    }
                                ]
                            },
                        }
                    ],
                },
            )

        if path == "/v1/notifications/verify-webhook-signature":
            return httpx.Response(200, json={"verification_status": self.verification_status})

        return httpx.Response(404, json={"name": "NOT_FOUND"})

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def stub():
    return PayPalStub()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
async def client(stub, sleeps):
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    settings = PaymentsSettings(
        paypal_client_id="client-id",
        paypal_client_secret="client-secret",
        paypal_mode="sandbox",
        paypal_max_retries=2,
    )
    paypal = PayPalClient(settings, transport=httpx.MockTransport(stub), sleep=fake_sleep)
    yield paypal
    await paypal.aclose()


async def _create_order(client):
    return await client.create_order(
        amount=Decimal("19.99"),
        currency="usd",
        description="Python desde cero",
        custom_id="user_42_course_7",
        return_url="https://app/purchase/success",
        cancel_url="https://app/purchase/cancelled",
    )


@pytest.mark.asyncio
async def test_create_order_returns_approve_link(client, stub):
    order = await _create_order(client)

    assert order.order_id == "ORDER1"
    assert order.approve_url == "https://www.sandbox.paypal.com/checkoutnow?token=ORDER1"
    assert order.amount == "19.99"
    assert order.currency == "USD"

    body = json.loads(stub.requests[-1].content)
    unit = body["purchase_units"][0]
    assert body["intent"] == "CAPTURE"
    assert unit["amount"] == {"currency_code": "USD", "value": "19.99"}
    assert unit["custom_id"] == "user_42_course_7"
    assert body["application_context"]["return_url"] == "https://app/purchase/success"
    assert stub.requests[-1].headers["Authorization"] == "Bearer TOKEN1"


@pytest.mark.asyncio
async def test_access_token_is_cached(client, stub):
    await _create_order(client)
    await _create_order(client)

    assert stub.token_calls == 1
    assert stub.paths().count("/v2/checkout/orders") == 2


@pytest.mark.asyncio
async def test_transient_errors_are_retried(client, stub, sleeps):
    stub.order_statuses = [503, 502]

    order = await _create_order(client)

    assert order.order_id == "ORDER1"
    assert stub.paths().count("/v2/checkout/orders") == 3
    assert sleeps == [0.5, 1.0]


@pytest.mark.asyncio
async def test_rate_limit_uses_longer_backoff(client, stub, sleeps):
    stub.order_statuses = [429]

    await _create_order(client)

    assert sleeps == [2.0]


@pytest.mark.asyncio
async def test_retries_are_bounded(client, stub):
    stub.order_statuses = [503, 503, 503]

    with pytest.raises(PayPalAPIError) as exc_info:
        await _create_order(client)

    assert exc_info.value.status_code == 503
    assert stub.paths().count("/v2/checkout/orders") == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(client, stub, sleeps):
    stub.order_statuses = [400]

    with pytest.raises(PayPalAPIError) as exc_info:
        await _create_order(client)

    assert exc_info.value.status_code == 400
    assert exc_info.value.operation == "create_order"
    assert sleeps == []


@pytest.mark.asyncio
async def test_missing_credentials_fail_fast(stub):
    settings = PaymentsSettings(paypal_client_id=None, paypal_client_secret=None)
    paypal = PayPalClient(settings, transport=httpx.MockTransport(stub))
    try:
        with pytest.raises(PayPalAPIError):
            await _create_order(paypal)
    finally:
        await paypal.aclose()
    assert stub.requests == []


@pytest.mark.asyncio
async def test_capture_order_parses_first_capture(client):
    capture = await client.capture_order("ORDER1")

    assert capture.capture_id == "CAP123"
    assert capture.order_id == "ORDER1"
    assert capture.status == "COMPLETED"
    assert capture.amount == "19.99"
    assert capture.currency == "USD"
    assert capture.custom_id == "user_42_course_7"


@pytest.mark.asyncio
async def test_verify_signature_success(client, stub):
    body = b'{"id": "WH-1", "event_type": "PAYMENT.CAPTURE.COMPLETED"}'

    assert await client.verify_webhook_signature(SIGNATURE_HEADERS, body, "WH-ID") is True

    payload = json.loads(stub.requests[-1].content)
    assert payload["webhook_id"] == "WH-ID"
    assert payload["transmission_id"] == "T-1"
    assert payload["webhook_event"]["id"] == "WH-1"


@pytest.mark.asyncio
async def test_verify_signature_failure_status(client, stub):
    stub.verification_status = "FAILURE"

    assert await client.verify_webhook_signature(SIGNATURE_HEADERS, b"{}", "WH-ID") is False


@pytest.mark.asyncio
async def test_verify_signature_missing_headers_skips_api(client, stub):
    headers = dict(SIGNATURE_HEADERS, **{"paypal-transmission-sig": None})

    assert await client.verify_webhook_signature(headers, b"{}", "WH-ID") is False
    assert stub.requests == []


@pytest.mark.asyncio
async def test_verify_signature_invalid_json_is_rejected(client, stub):
    assert await client.verify_webhook_signature(SIGNATURE_HEADERS, b"nope", "WH-ID") is False
    assert stub.requests == []


def test_live_mode_uses_production_base_url():
    assert PaymentsSettings(paypal_mode="LIVE").paypal_base_url == "https://api-m.paypal.com"
    assert PaymentsSettings(paypal_mode="sandbox").paypal_base_url == "https://api-m.sandbox.paypal.com"

# Fin del archivo tests/modules/payments/services/test_paypal_client.py
