# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/handler.py

Despacho de webhooks de PayPal.

Flujo por evento: recibido -> verificado/rechazado -> enrutado -> ack.

- La verificación de firma es la única fase que puede producir una
  respuesta distinta de 200 (401/500, ver verify.py).
- Una vez verificado, cualquier error interno se registra y el webhook
  se confirma igualmente con {"received": True, "error": ...} para no
  provocar reintentos en cadena de PayPal.
- La tabla de ruteo está indexada por PayPalEventType; los tipos
  desconocidos se registran y se ignoran.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from app.modules.payments.enums import PayPalEventType
from app.modules.payments.metrics.exporters.prometheus_exporter import (
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_verified,
)

from .capture_completed import handle_capture_completed
from .capture_denied import handle_capture_denied
from .capture_refunded import handle_capture_refunded
from .context import WebhookContext, WebhookOutcome, WebhookResult
from .normalize import PayPalWebhookEvent, WebhookNormalizationError, parse_webhook_event
from .order_approved import handle_order_approved
from .verify import (
    VerificationMode,
    WebhookSignatureError,
    WebhookVerificationNotConfigured,
    verify_paypal_webhook,
)

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[WebhookContext, PayPalWebhookEvent], Awaitable[WebhookResult]]

EVENT_HANDLERS: Dict[PayPalEventType, WebhookHandler] = {
    PayPalEventType.CAPTURE_COMPLETED: handle_capture_completed,
    PayPalEventType.CAPTURE_DENIED: handle_capture_denied,
    PayPalEventType.CAPTURE_REFUNDED: handle_capture_refunded,
    PayPalEventType.ORDER_APPROVED: handle_order_approved,
}

ACK: Dict[str, Any] = {"received": True}
ACK_WITH_ERROR: Dict[str, Any] = {"received": True, "error": "processed with error"}


async def route_event(ctx: WebhookContext, event: PayPalWebhookEvent) -> WebhookResult:
    event_type = PayPalEventType.parse(event.event_type)
    if event_type is None:
        logger.info(f"[webhook] tipo de evento no manejado, se ignora: {event.log_context()}")
        return WebhookResult(WebhookOutcome.IGNORED, detail=event.event_type)
    return await EVENT_HANDLERS[event_type](ctx, event)


async def dispatch_webhook_event(ctx: WebhookContext, raw_body: bytes) -> Dict[str, Any]:
    """
    Parsea y enruta un evento ya verificado.

    Nunca lanza: cualquier excepción se registra con el contexto del
    evento y se devuelve el ack con campo "error".
    """
    start = time.perf_counter()
    event_type = "unknown"
    try:
        event = parse_webhook_event(raw_body)
        event_type = event.event_type or "unknown"
        observe_webhook_received(event_type)
        logger.info(f"[webhook] recibido {event.log_context()}")

        result = await route_event(ctx, event)
    except WebhookNormalizationError as e:
        logger.error(f"[webhook] payload inválido: {e}")
        observe_webhook_outcome(event_type, "error", time.perf_counter() - start)
        return dict(ACK_WITH_ERROR)
    except Exception:  # noqa: BLE001
        logger.exception(f"[webhook] error procesando evento {event_type}")
        observe_webhook_outcome(event_type, "error", time.perf_counter() - start)
        return dict(ACK_WITH_ERROR)

    observe_webhook_outcome(event_type, result.outcome.value, time.perf_counter() - start)
    logger.info(
        f"[webhook] {event_type} procesado: outcome={result.outcome} "
        f"user={result.user_id} course={result.course_id}"
    )
    return dict(ACK)


async def process_paypal_webhook(
    ctx: WebhookContext,
    raw_body: bytes,
    headers: Mapping[str, str],
    *,
    webhook_id: Optional[str] = None,
    environment: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Verifica la firma y despacha el evento.

    Raises:
        WebhookSignatureError: firma inválida (la ruta responde 401).
        WebhookVerificationNotConfigured: producción sin webhook ID (500).
    """
    try:
        mode = await verify_paypal_webhook(
            raw_body,
            headers,
            webhook_id=webhook_id,
            environment=environment,
            client=ctx.paypal,
        )
    except WebhookSignatureError:
        observe_webhook_verified("invalid_signature")
        raise
    except WebhookVerificationNotConfigured:
        observe_webhook_verified("not_configured")
        raise

    observe_webhook_verified(mode.value)
    if mode is VerificationMode.SKIPPED_DEV:
        logger.warning("[webhook] procesando evento SIN verificar firma")

    return await dispatch_webhook_event(ctx, raw_body)


__all__ = [
    "EVENT_HANDLERS",
    "WebhookHandler",
    "route_event",
    "dispatch_webhook_event",
    "process_paypal_webhook",
]

# Fin del archivo app/modules/payments/facades/webhooks/handler.py
