# -*- coding: utf-8 -*-
"""
app/modules/payments/services/paypal_client.py

Cliente async de la API REST de PayPal (httpx).

Operaciones:
- get_access_token(): OAuth2 client_credentials, cacheado (expires_in - 60s)
- create_order(): POST /v2/checkout/orders (intent CAPTURE)
- capture_order(): POST /v2/checkout/orders/{id}/capture
- verify_webhook_signature(): POST /v1/notifications/verify-webhook-signature

Timeouts explícitos y reintentos limitados sólo para errores transitorios
(429, 502, 503, 504 y timeouts). El cliente httpx es singleton con
keep-alive; cerrar con close_paypal_client() en el lifespan.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

import httpx

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from app.shared.utils.currency import format_amount, normalize_currency, to_amount

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURACIÓN HTTP
# =============================================================================

PAYPAL_HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=50,
    keepalive_expiry=30.0,
)

# Códigos HTTP transitorios (retry permitido)
TRANSIENT_HTTP_ERRORS = frozenset({429, 502, 503, 504})

RETRY_BACKOFF_BASE = 0.5
RETRY_BACKOFF_429 = 2.0


class PayPalAPIError(RuntimeError):
    """Fallo de la API de PayPal (HTTP no exitoso, timeout o respuesta inválida)."""

    def __init__(self, message: str, status_code: Optional[int] = None, operation: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.operation = operation


@dataclass(frozen=True)
class PayPalOrder:
    order_id: str
    approve_url: str
    amount: str
    currency: str


@dataclass(frozen=True)
class PayPalCapture:
    capture_id: str
    order_id: str
    status: str
    amount: str
    currency: str
    custom_id: Optional[str] = None


def _get_backoff_for_status(status_code: Optional[int], attempt: int) -> float:
    if status_code == 429:
        return RETRY_BACKOFF_429 * (2 ** attempt)
    return RETRY_BACKOFF_BASE * (2 ** attempt)


class PayPalClient:
    """Cliente de la API de PayPal con caché de token en memoria."""

    def __init__(
        self,
        settings: Optional[PaymentsSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep=asyncio.sleep,
    ):
        self.settings = settings or get_payments_settings()
        self.base_url = self.settings.paypal_base_url
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.settings.paypal_timeout_seconds, connect=5.0),
            limits=PAYPAL_HTTP_LIMITS,
            transport=transport,
        )
        self._token: Optional[str] = None
        self._token_expires_at: float = 0.0
        self._token_lock = asyncio.Lock()
        self._sleep = sleep

    @property
    def max_retries(self) -> int:
        return max(0, self.settings.paypal_max_retries)

    async def aclose(self) -> None:
        await self._http.aclose()

    def clear_token_cache(self) -> None:
        self._token = None
        self._token_expires_at = 0.0

    # -------------------------------------------------------------------------
    # HTTP con reintentos
    # -------------------------------------------------------------------------
    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        last_error: Optional[Exception] = None
        last_status: Optional[int] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self._http.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                last_error = e
                last_status = None
            except httpx.TransportError as e:
                raise PayPalAPIError(f"{operation}: error de transporte - {e}", operation=operation) from e
            else:
                if response.status_code not in TRANSIENT_HTTP_ERRORS:
                    return response
                last_status = response.status_code
                last_error = None

            if attempt < self.max_retries:
                backoff = _get_backoff_for_status(last_status, attempt)
                logger.warning(
                    f"PayPal {operation}: error transitorio {last_status or 'timeout'}, "
                    f"reintentando en {backoff}s (intento {attempt + 1}/{self.max_retries + 1})"
                )
                await self._sleep(backoff)

        raise PayPalAPIError(
            f"{operation}: falló después de {self.max_retries + 1} intentos "
            f"({last_status or last_error})",
            status_code=last_status,
            operation=operation,
        )

    # -------------------------------------------------------------------------
    # Token
    # -------------------------------------------------------------------------
    async def get_access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        client_id = self.settings.paypal_client_id
        client_secret = self.settings.paypal_client_secret
        if not client_id or not client_secret:
            raise PayPalAPIError("PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET no configurados", operation="token")

        async with self._token_lock:
            if self._token and time.monotonic() < self._token_expires_at:
                return self._token

            response = await self._request(
                "POST",
                "/v1/oauth2/token",
                operation="token",
                auth=(client_id, client_secret),
                data={"grant_type": "client_credentials"},
                headers={"Accept": "application/json"},
            )
            if response.status_code != 200:
                raise PayPalAPIError(
                    f"token: HTTP {response.status_code} - {response.text[:200]}",
                    status_code=response.status_code,
                    operation="token",
                )
            data = response.json()
            token = data.get("access_token")
            if not token:
                raise PayPalAPIError("token: respuesta sin access_token", operation="token")

            expires_in = int(data.get("expires_in", 3600))
            ttl = max(expires_in - 60, 60)
            self._token = token
            self._token_expires_at = time.monotonic() + ttl
            logger.debug(f"PayPal access token obtenido y cacheado (TTL={ttl}s)")
            return token

    async def _auth_headers(self) -> dict[str, str]:
        token = await self.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    # -------------------------------------------------------------------------
    # Órdenes
    # -------------------------------------------------------------------------
    async def create_order(
        self,
        *,
        amount: Decimal,
        currency: str,
        description: str,
        custom_id: str,
        return_url: str,
        cancel_url: str,
    ) -> PayPalOrder:
        currency = normalize_currency(currency, "USD")
        value = format_amount(amount)
        body = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "amount": {"currency_code": currency, "value": value},
                    "description": description[:127],
                    "custom_id": custom_id,
                }
            ],
            "application_context": {
                "return_url": return_url,
                "cancel_url": cancel_url,
                "user_action": "PAY_NOW",
                "shipping_preference": "NO_SHIPPING",
            },
        }
        response = await self._request(
            "POST",
            "/v2/checkout/orders",
            operation="create_order",
            json=body,
            headers=await self._auth_headers(),
        )
        if response.status_code not in (200, 201):
            raise PayPalAPIError(
                f"create_order: HTTP {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
                operation="create_order",
            )

        data = response.json()
        order_id = data.get("id")
        approve_url = next(
            (
                link.get("href")
                for link in data.get("links", [])
                if link.get("rel") in ("approve", "payer-action")
            ),
            None,
        )
        if not order_id or not approve_url:
            raise PayPalAPIError("create_order: respuesta sin id o approve link", operation="create_order")

        logger.info(f"PayPal orden creada {order_id} ({value} {currency}) custom_id={custom_id}")
        return PayPalOrder(order_id=order_id, approve_url=approve_url, amount=value, currency=currency)

    async def capture_order(self, order_id: str) -> PayPalCapture:
        response = await self._request(
            "POST",
            f"/v2/checkout/orders/{order_id}/capture",
            operation="capture_order",
            headers=await self._auth_headers(),
            content=b"{}",
        )
        if response.status_code not in (200, 201):
            raise PayPalAPIError(
                f"capture_order: HTTP {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
                operation="capture_order",
            )

        data = response.json()
        units = data.get("purchase_units") or [{}]
        unit = units[0] or {}
        captures = ((unit.get("payments") or {}).get("captures")) or []
        if not captures:
            raise PayPalAPIError(f"capture_order: orden {order_id} sin capturas", operation="capture_order")
        capture = captures[0]
        amount = capture.get("amount") or {}

        return PayPalCapture(
            capture_id=capture.get("id", ""),
            order_id=data.get("id", order_id),
            status=capture.get("status", data.get("status", "")),
            amount=format_amount(to_amount(amount.get("value"))),
            currency=normalize_currency(amount.get("currency_code"), "USD"),
            custom_id=capture.get("custom_id") or unit.get("custom_id"),
        )

    # -------------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------------
    async def verify_webhook_signature(
        self,
        headers: Mapping[str, Optional[str]],
        raw_body: bytes,
        webhook_id: str,
    ) -> bool:
        """
        Verifica la firma vía API oficial.

        Returns:
            True sólo si PayPal responde verification_status == "SUCCESS".
            Cualquier header faltante, payload inválido o error de API => False.
        """
        required = {
            "auth_algo": headers.get("paypal-auth-algo"),
            "cert_url": headers.get("paypal-cert-url"),
            "transmission_id": headers.get("paypal-transmission-id"),
            "transmission_sig": headers.get("paypal-transmission-sig"),
            "transmission_time": headers.get("paypal-transmission-time"),
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            logger.warning(f"PayPal webhook rechazado: faltan headers requeridos {missing}")
            return False

        try:
            webhook_event = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning(f"PayPal webhook rechazado: payload no es JSON válido - {e}")
            return False

        payload = {**required, "webhook_id": webhook_id, "webhook_event": webhook_event}

        try:
            response = await self._request(
                "POST",
                "/v1/notifications/verify-webhook-signature",
                operation="verify_webhook",
                json=payload,
                headers=await self._auth_headers(),
            )
        except PayPalAPIError as e:
            logger.error(f"PayPal webhook rechazado: error llamando a verify API - {e}")
            return False

        if response.status_code != 200:
            logger.warning(
                f"PayPal verify-webhook-signature failed: {response.status_code} - {response.text[:200]}"
            )
            return False

        status = (response.json() or {}).get("verification_status", "")
        if status == "SUCCESS":
            logger.debug("PayPal webhook: firma verificada via API")
            return True
        logger.warning(f"PayPal webhook rechazado: verification_status = {status}")
        return False


# =============================================================================
# SINGLETON
# =============================================================================

_paypal_client: Optional[PayPalClient] = None


def get_paypal_client() -> PayPalClient:
    global _paypal_client
    if _paypal_client is None:
        _paypal_client = PayPalClient()
        logger.debug(f"Cliente PayPal creado (base_url={_paypal_client.base_url})")
    return _paypal_client


def set_paypal_client(client: Optional[PayPalClient]) -> None:
    """Reemplaza el singleton (tests)."""
    global _paypal_client
    _paypal_client = client


async def close_paypal_client() -> None:
    """Cierra el cliente HTTP. Registrar en el lifespan de FastAPI."""
    global _paypal_client
    if _paypal_client is not None:
        try:
            await _paypal_client.aclose()
        except (httpx.HTTPError, RuntimeError) as e:
            logger.warning(f"Error cerrando cliente PayPal HTTP: {e}")
    _paypal_client = None


__all__ = [
    "PayPalClient",
    "PayPalAPIError",
    "PayPalOrder",
    "PayPalCapture",
    "TRANSIENT_HTTP_ERRORS",
    "get_paypal_client",
    "set_paypal_client",
    "close_paypal_client",
]

# Fin del archivo app/modules/payments/services/paypal_client.py
