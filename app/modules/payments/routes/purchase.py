# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/purchase.py

Endpoint de compra de cursos.

Endpoint:
- POST /purchase/create

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user
from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.courses.services.course_catalog import CourseCatalog, get_course_catalog
from app.modules.notifications.services.telegram_notifier import TelegramNotifier, get_telegram_notifier
from app.modules.payments.facades.checkout import (
    AlreadyPurchasedError,
    CourseNotFoundError,
    CreatePurchaseRequest,
    CreatePurchaseResponse,
    InvalidCourseIdError,
    create_purchase_order,
)
from app.modules.payments.metrics.exporters.prometheus_exporter import observe_order_failed
from app.modules.payments.services.paypal_client import PayPalAPIError, PayPalClient, get_paypal_client
from app.shared.config import get_settings
from app.shared.database import get_db
from app.shared.utils.http_exceptions import (
    BadGatewayException,
    BadRequestException,
    ConflictException,
    NotFoundException,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/purchase",
    tags=["payments:purchase"],
)


@router.post(
    "/create",
    response_model=CreatePurchaseResponse,
)
async def create_purchase(
    payload: CreatePurchaseRequest,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    catalog: CourseCatalog = Depends(get_course_catalog),
    paypal: PayPalClient = Depends(get_paypal_client),
    notifier: TelegramNotifier = Depends(get_telegram_notifier),
) -> CreatePurchaseResponse:
    """
    Crea una orden PayPal para el curso y devuelve el link de aprobación.

    Errores: 400 id inválido, 404 curso inexistente, 409 ya comprado,
    502 fallo de PayPal.
    """
    try:
        data = await create_purchase_order(
            session,
            user=user,
            course_id=payload.course_id,
            catalog=catalog,
            paypal=paypal,
            notifier=notifier,
            frontend_url=get_settings().frontend_url,
        )
    except InvalidCourseIdError as e:
        observe_order_failed("invalid_course")
        raise BadRequestException(str(e))
    except CourseNotFoundError as e:
        observe_order_failed("not_found")
        raise NotFoundException(str(e))
    except AlreadyPurchasedError as e:
        observe_order_failed("already_purchased")
        raise ConflictException(str(e))
    except PayPalAPIError as e:
        observe_order_failed("provider_error")
        logger.error(
            f"Fallo creando orden PayPal para user {user.id}, curso {payload.course_id}: {e}"
        )
        raise BadGatewayException("Failed to create PayPal order")

    return CreatePurchaseResponse(data=data)


__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/purchase.py
