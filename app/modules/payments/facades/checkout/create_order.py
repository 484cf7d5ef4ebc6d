# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/create_order.py

Fachada de alto nivel para iniciar la compra de un curso con PayPal.

Orquesta:
- Validación del curso (directorio + metadatos) y de compra previa
- Creación de la orden en PayPal con custom_id user_<id>_course_<id>
- Aviso "procesando" por Telegram (best-effort, guarda message_id)
- Alta de la transacción pending con payment_id = order id
- Construcción de la respuesta para el frontend

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.courses.repositories.entitlement_repository import EntitlementRepository
from app.modules.courses.services.course_catalog import CourseCatalog
from app.modules.notifications.services.telegram_notifier import NotificationTarget, TelegramNotifier
from app.modules.payments.facades.webhooks.custom_id import build_custom_id
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_order_created
from app.modules.payments.repositories.transaction_repository import TransactionRepository
from app.modules.payments.services.paypal_client import PayPalClient
from app.shared.utils.best_effort import run_best_effort

from .dto import PurchaseOrderData
from .validators import ensure_not_purchased, load_purchasable_course

logger = logging.getLogger(__name__)


async def create_purchase_order(
    session: AsyncSession,
    *,
    user: CurrentUser,
    course_id: int,
    catalog: CourseCatalog,
    paypal: PayPalClient,
    notifier: TelegramNotifier,
    frontend_url: str,
    entitlements: Optional[EntitlementRepository] = None,
    transactions: Optional[TransactionRepository] = None,
) -> PurchaseOrderData:
    """
    Crea la orden PayPal y la transacción pending del usuario.

    Raises:
        InvalidCourseIdError / CourseNotFoundError / AlreadyPurchasedError
        PayPalAPIError: fallo del proveedor (no se reintenta aquí).
    """
    entitlements = entitlements or EntitlementRepository()
    transactions = transactions or TransactionRepository()

    # 1) Curso comprable y no adquirido antes
    meta = load_purchasable_course(catalog, course_id)
    await ensure_not_purchased(session, entitlements, user_id=user.id, course_id=course_id)

    # 2) Orden en PayPal
    custom_id = build_custom_id(user.id, course_id)
    order = await paypal.create_order(
        amount=meta.price,
        currency=meta.currency,
        description=meta.title,
        custom_id=custom_id,
        return_url=f"{frontend_url}/purchase/success",
        cancel_url=f"{frontend_url}/purchase/cancelled",
    )

    # 3) Aviso "procesando"; su message_id se edita al confirmar el pago
    notice = await run_best_effort(
        notifier.send_purchase_processing(
            NotificationTarget(
                user_id=user.id,
                telegram_id=user.telegram_id,
                notifications_enabled=user.notifications_enabled,
            ),
            meta.title,
        ),
        label=f"aviso de compra en proceso user={user.id}",
        log=logger,
    )

    # 4) Transacción pending
    await transactions.create_pending(
        session,
        user_id=user.id,
        course_id=course_id,
        order_id=order.order_id,
        amount=meta.price,
        currency=order.currency,
        notification_message_id=notice.value if notice.ok else None,
    )
    await session.commit()

    observe_order_created(order.currency)
    logger.info(
        f"Orden PayPal {order.order_id} creada para user {user.id}, curso {course_id} "
        f"\"{meta.title}\", monto {order.amount} {order.currency}"
    )

    return PurchaseOrderData(
        order_id=order.order_id,
        approve_url=order.approve_url,
        price=float(meta.price),
        amount=order.amount,
        currency=order.currency,
    )


__all__ = ["create_purchase_order"]

# Fin del archivo app/modules/payments/facades/checkout/create_order.py
