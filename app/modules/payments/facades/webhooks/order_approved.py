# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/order_approved.py

CHECKOUT.ORDER.APPROVED: captura la orden en PayPal y procesa el
resultado como si hubiera llegado PAYMENT.CAPTURE.COMPLETED.

Si la captura falla se registra el error y se responde sin relanzar;
PayPal enviará el evento de captura por su cuenta si el comprador
completa el pago por otra vía.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging

from app.modules.payments.enums import PayPalEventType
from app.modules.payments.services.paypal_client import PayPalAPIError

from .capture_completed import handle_capture_completed
from .context import WebhookContext, WebhookOutcome, WebhookResult
from .normalize import (
    PayPalAmount,
    PayPalRelatedIds,
    PayPalResource,
    PayPalSupplementaryData,
    PayPalWebhookEvent,
)

logger = logging.getLogger(__name__)


def synthesize_capture_event(
    event: PayPalWebhookEvent,
    *,
    capture_id: str,
    order_id: str,
    custom_id: str | None,
    amount_value: str,
    currency: str | None,
) -> PayPalWebhookEvent:
    """Evento CAPTURE.COMPLETED equivalente al resultado de capturar la orden."""
    return PayPalWebhookEvent(
        id=event.id,
        event_type=PayPalEventType.CAPTURE_COMPLETED.value,
        resource_type="capture",
        resource=PayPalResource(
            id=capture_id,
            status="COMPLETED",
            custom_id=custom_id,
            amount=PayPalAmount(value=amount_value, currency_code=currency),
            supplementary_data=PayPalSupplementaryData(
                related_ids=PayPalRelatedIds(order_id=order_id)
            ),
        ),
    )


async def handle_order_approved(ctx: WebhookContext, event: PayPalWebhookEvent) -> WebhookResult:
    order_id = event.resource.id
    if not order_id:
        logger.error("[approved] evento sin id de orden; se ignora")
        return WebhookResult(WebhookOutcome.IGNORED, detail="missing order id")

    try:
        capture = await ctx.paypal.capture_order(order_id)
    except PayPalAPIError as e:
        logger.error(f"[approved] error capturando orden {order_id}: {e}")
        return WebhookResult(WebhookOutcome.CAPTURE_FAILED, detail=str(e))

    custom_id = event.resource.resolve_custom_id() or capture.custom_id
    logger.info(
        f"[approved] orden {order_id} capturada: captura {capture.capture_id} status={capture.status}"
    )

    synthetic = synthesize_capture_event(
        event,
        capture_id=capture.capture_id,
        order_id=order_id,
        custom_id=custom_id,
        amount_value=capture.amount,
        currency=capture.currency,
    )
    return await handle_capture_completed(ctx, synthetic)


__all__ = ["handle_order_approved", "synthesize_capture_event"]

# Fin del archivo app/modules/payments/facades/webhooks/order_approved.py
