# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/capture_completed.py

PAYMENT.CAPTURE.COMPLETED: otorga acceso al curso una sola vez por pago.

Pasos:
1. custom_id -> (user_id, course_id); inválido => se registra y termina.
2. El curso debe existir (directorio + metadatos).
3. El usuario debe existir.
   Si la captura ya tiene fila success (reentrega, también después de
   un reembolso) => duplicado, sin alta ni aviso.
4. Alta de user_courses con UNIQUE(user_id, course_id) en SAVEPOINT; si
   ya existía (reentrega o carrera) => duplicado, sin aviso al usuario.
5. Reconciliación de la transacción (se ejecuta también en duplicados,
   para que una entrega reintentada tras un fallo deje la fila pending
   en success).
6. Commit; después, invalidación de caché y aviso best-effort sólo si
   el acceso se otorgó en esta entrega.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging

from app.modules.auth.models.user_models import User
from app.modules.notifications.services.telegram_notifier import NotificationTarget
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_access_change
from app.shared.cache import CacheKeys, cache_delete
from app.shared.utils.best_effort import run_best_effort
from app.shared.utils.currency import normalize_currency, to_amount

from .context import WebhookContext, WebhookOutcome, WebhookResult
from .custom_id import parse_custom_id
from .normalize import PayPalWebhookEvent

logger = logging.getLogger(__name__)


async def handle_capture_completed(ctx: WebhookContext, event: PayPalWebhookEvent) -> WebhookResult:
    resource = event.resource
    capture_id = resource.id
    raw_custom_id = resource.resolve_custom_id()
    order_id = resource.order_id

    parsed = parse_custom_id(raw_custom_id)
    if parsed is None:
        logger.error(
            f"[grant] custom_id ausente o inválido ({raw_custom_id!r}) para captura {capture_id}; "
            "no se puede identificar usuario/curso"
        )
        return WebhookResult(WebhookOutcome.INVALID_CUSTOM_ID, detail=raw_custom_id)

    user_id, course_id = parsed.user_id, parsed.course_id
    logger.info(
        f"[grant] procesando pago completado user_id={user_id} course_id={course_id} "
        f"capture_id={capture_id} order_id={order_id or 'none'}"
    )

    if not ctx.catalog.course_exists(course_id):
        logger.error(f"[grant] curso {course_id} no existe en disco; captura {capture_id} sin acceso otorgado")
        return WebhookResult(WebhookOutcome.COURSE_NOT_FOUND, user_id, course_id)

    meta = ctx.catalog.load_metadata(course_id)
    if meta is None:
        logger.error(f"[grant] curso {course_id} sin metadatos; captura {capture_id} sin acceso otorgado")
        return WebhookResult(WebhookOutcome.COURSE_NOT_FOUND, user_id, course_id)

    amount = to_amount(resource.amount_value, default=meta.price)
    currency = normalize_currency(resource.amount_currency, meta.currency)

    async with ctx.session_factory() as session:
        user = await session.get(User, user_id)
        if user is None:
            logger.error(
                f"[grant] usuario {user_id} no existe; captura {capture_id} custom_id={raw_custom_id} "
                "requiere reconciliación manual"
            )
            return WebhookResult(WebhookOutcome.USER_NOT_FOUND, user_id, course_id)

        # Captura ya registrada como success: reentrega, posiblemente tras un reembolso
        if capture_id and await ctx.transactions.get_success_by_payment_id(session, capture_id) is not None:
            logger.warning(
                f"[grant] captura {capture_id} ya registrada (user={user_id} course={course_id}); "
                "se ignora la reentrega sin otorgar acceso"
            )
            observe_access_change("duplicate")
            return WebhookResult(WebhookOutcome.DUPLICATE, user_id, course_id)

        if await ctx.entitlements.exists(session, user_id, course_id):
            granted = False
        else:
            granted = await ctx.entitlements.grant_if_absent(session, user_id, course_id)

        if not granted:
            logger.warning(
                f"[grant] user {user_id} ya tenía acceso al curso {course_id}; "
                f"se omite otorgamiento duplicado para captura {capture_id}"
            )

        reconcile = await ctx.transactions.reconcile_capture(
            session,
            user_id=user_id,
            course_id=course_id,
            capture_id=capture_id,
            order_id=order_id,
            amount=amount,
            currency=currency,
        )
        target = NotificationTarget(
            user_id=user.id,
            telegram_id=user.telegram_id,
            notifications_enabled=user.notifications_enabled,
        )
        await session.commit()

    logger.info(f"[grant] transacción de captura {capture_id}: {reconcile.outcome}")

    if not granted:
        observe_access_change("duplicate")
        return WebhookResult(WebhookOutcome.DUPLICATE, user_id, course_id)

    observe_access_change("granted")
    await run_best_effort(
        cache_delete(CacheKeys.user_courses(user_id), CacheKeys.user(target.telegram_id)),
        label=f"invalidar caché user={user_id}",
        log=logger,
    )
    await run_best_effort(
        ctx.notifier.send_purchase_confirmation(target, meta.title, reconcile.notification_message_id),
        label=f"confirmación de compra user={user_id} course={course_id}",
        log=logger,
    )

    logger.info(
        f"[grant] acceso otorgado user={user_id} course={course_id} \"{meta.title}\" "
        f"captura {capture_id} monto {amount} {currency}"
    )
    return WebhookResult(WebhookOutcome.GRANTED, user_id, course_id)


__all__ = ["handle_capture_completed"]

# Fin del archivo app/modules/payments/facades/webhooks/capture_completed.py
