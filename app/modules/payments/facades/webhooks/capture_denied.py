# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/capture_denied.py

PAYMENT.CAPTURE.DENIED: registra una transacción failed. No toca accesos.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging

from app.modules.auth.models.user_models import User
from app.shared.utils.currency import normalize_currency, to_amount

from .context import WebhookContext, WebhookOutcome, WebhookResult
from .custom_id import parse_custom_id
from .normalize import PayPalWebhookEvent

logger = logging.getLogger(__name__)


async def handle_capture_denied(ctx: WebhookContext, event: PayPalWebhookEvent) -> WebhookResult:
    resource = event.resource
    raw_custom_id = resource.resolve_custom_id()
    parsed = parse_custom_id(raw_custom_id)
    if parsed is None:
        logger.error(f"[denied] custom_id inválido ({raw_custom_id!r}) en captura denegada {resource.id}")
        return WebhookResult(WebhookOutcome.INVALID_CUSTOM_ID, detail=raw_custom_id)

    amount = to_amount(resource.amount_value)
    currency = normalize_currency(resource.amount_currency, ctx.catalog.default_paypal_currency())

    async with ctx.session_factory() as session:
        if await session.get(User, parsed.user_id) is None:
            logger.error(
                f"[denied] usuario {parsed.user_id} no existe; captura denegada {resource.id} "
                f"custom_id={raw_custom_id} course={parsed.course_id} sin registrar"
            )
            return WebhookResult(WebhookOutcome.USER_NOT_FOUND, parsed.user_id, parsed.course_id)

        await ctx.transactions.record_failed(
            session,
            user_id=parsed.user_id,
            course_id=parsed.course_id,
            payment_id=resource.id or None,
            amount=amount,
            currency=currency,
        )
        await session.commit()

    logger.warning(
        f"[denied] pago denegado user={parsed.user_id} course={parsed.course_id} "
        f"captura {resource.id} monto {amount} {currency}"
    )
    return WebhookResult(WebhookOutcome.RECORDED, parsed.user_id, parsed.course_id)


__all__ = ["handle_capture_denied"]

# Fin del archivo app/modules/payments/facades/webhooks/capture_denied.py
