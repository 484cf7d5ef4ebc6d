# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/webhooks_paypal.py

Webhook endpoint para PayPal.

Endpoints:
- POST /webhooks/paypal        eventos push de PayPal
- GET  /webhooks/paypal/test   sonda de disponibilidad (sin auth)

Respuestas del POST:
- 200 {"received": true} en todos los casos tras verificar la firma,
  con "error" si el procesamiento interno falló.
- 401 firma inválida.
- 500 verificación requerida pero no configurada (producción).

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.modules.courses.services.course_catalog import get_course_catalog
from app.modules.notifications.services.telegram_notifier import get_telegram_notifier
from app.modules.payments.facades.webhooks import (
    WebhookContext,
    WebhookSignatureError,
    WebhookVerificationNotConfigured,
    process_paypal_webhook,
)
from app.modules.payments.services.paypal_client import get_paypal_client
from app.shared.database import get_sessionmaker

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def build_webhook_context() -> WebhookContext:
    return WebhookContext(
        session_factory=get_sessionmaker(),
        catalog=get_course_catalog(),
        paypal=get_paypal_client(),
        notifier=get_telegram_notifier(),
    )


@router.post(
    "/paypal",
    status_code=status.HTTP_200_OK,
)
async def paypal_webhook(
    request: Request,
    ctx: WebhookContext = Depends(build_webhook_context),
) -> Dict[str, Any]:
    """Webhook de PayPal para capturas, denegaciones y reembolsos."""
    raw_body = await request.body()
    headers = dict(request.headers)

    try:
        return await process_paypal_webhook(ctx, raw_body, headers)
    except WebhookSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook signature",
        )
    except WebhookVerificationNotConfigured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook verification not configured",
        )


@router.get("/paypal/test")
async def paypal_webhook_test() -> Dict[str, Any]:
    return {
        "success": True,
        "message": "PayPal webhook endpoint is accessible",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "server": "running",
    }


__all__ = ["router", "build_webhook_context"]

# Fin del archivo app/modules/payments/routes/webhooks_paypal.py
