# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/capture_refunded.py

PAYMENT.CAPTURE.REFUNDED: revoca el acceso y registra una transacción
refunded.

El reembolso siempre revoca, aunque sea parcial o aunque el usuario
tenga otro pago exitoso del mismo curso. Una reentrega del mismo evento
vuelve a insertar una fila refunded (no hay clave de idempotencia para
reembolsos).

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging

from app.modules.auth.models.user_models import User
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_access_change
from app.shared.cache import CacheKeys, cache_delete
from app.shared.utils.best_effort import run_best_effort
from app.shared.utils.currency import normalize_currency, to_amount

from .context import WebhookContext, WebhookOutcome, WebhookResult
from .custom_id import parse_custom_id
from .normalize import PayPalWebhookEvent

logger = logging.getLogger(__name__)


async def handle_capture_refunded(ctx: WebhookContext, event: PayPalWebhookEvent) -> WebhookResult:
    resource = event.resource
    raw_custom_id = resource.resolve_custom_id()
    parsed = parse_custom_id(raw_custom_id)
    if parsed is None:
        logger.error(f"[refund] custom_id inválido ({raw_custom_id!r}) en reembolso {resource.id}")
        return WebhookResult(WebhookOutcome.INVALID_CUSTOM_ID, detail=raw_custom_id)

    user_id, course_id = parsed.user_id, parsed.course_id
    amount = to_amount(resource.amount_value)
    currency = normalize_currency(resource.amount_currency, ctx.catalog.default_paypal_currency())

    async with ctx.session_factory() as session:
        user = await session.get(User, user_id)
        if user is None:
            logger.error(f"[refund] usuario {user_id} no existe; reembolso {resource.id} sin aplicar")
            return WebhookResult(WebhookOutcome.USER_NOT_FOUND, user_id, course_id)
        telegram_id = user.telegram_id

        revoked = await ctx.entitlements.revoke(session, user_id, course_id)
        await ctx.transactions.record_refunded(
            session,
            user_id=user_id,
            course_id=course_id,
            payment_id=resource.id or None,
            amount=amount,
            currency=currency,
        )
        await session.commit()

    observe_access_change("revoked")
    await run_best_effort(
        cache_delete(CacheKeys.user_courses(user_id), CacheKeys.user(telegram_id)),
        label=f"invalidar caché user={user_id}",
        log=logger,
    )
    logger.info(
        f"[refund] acceso revocado user={user_id} course={course_id} "
        f"(filas={revoked}) reembolso {resource.id} monto {amount} {currency}"
    )
    return WebhookResult(WebhookOutcome.REVOKED, user_id, course_id)


__all__ = ["handle_capture_refunded"]

# Fin del archivo app/modules/payments/facades/webhooks/capture_refunded.py
