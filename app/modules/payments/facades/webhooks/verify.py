# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/verify.py

Compuerta de verificación de firmas para webhooks de PayPal.

Reglas:
- Con PAYPAL_WEBHOOK_ID configurado: verificación REAL vía API oficial;
  firma ausente o inválida => WebhookSignatureError (401).
- Sin webhook ID en producción: WebhookVerificationNotConfigured (500),
  el evento no se procesa.
- Sin webhook ID fuera de producción: se procesa con un warning
  (sólo para desarrollo local).

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Mapping, Optional

from app.modules.payments.services.paypal_client import PayPalClient, get_paypal_client
from app.shared.config import get_payments_settings, get_settings

logger = logging.getLogger(__name__)

PAYPAL_SIGNATURE_HEADERS = (
    "paypal-auth-algo",
    "paypal-cert-url",
    "paypal-transmission-id",
    "paypal-transmission-sig",
    "paypal-transmission-time",
)


class WebhookSignatureError(Exception):
    """Firma de webhook ausente o inválida."""


class WebhookVerificationNotConfigured(Exception):
    """Verificación requerida (producción) pero sin PAYPAL_WEBHOOK_ID."""


class VerificationMode(StrEnum):
    VERIFIED = "verified"
    SKIPPED_DEV = "skipped_dev"


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Busca un header sin distinguir mayúsculas/minúsculas."""
    name_lower = name.lower()
    for key, value in headers.items():
        if key.lower() == name_lower:
            return value
    return None


def extract_paypal_headers(headers: Mapping[str, str]) -> dict[str, Optional[str]]:
    return {name: get_header(headers, name) for name in PAYPAL_SIGNATURE_HEADERS}


async def verify_paypal_webhook(
    raw_body: bytes,
    headers: Mapping[str, str],
    *,
    webhook_id: Optional[str] = None,
    environment: Optional[str] = None,
    client: Optional[PayPalClient] = None,
) -> VerificationMode:
    """
    Aplica la política de verificación.

    Raises:
        WebhookSignatureError: firma inválida con webhook ID configurado.
        WebhookVerificationNotConfigured: producción sin webhook ID.
    """
    if webhook_id is None:
        webhook_id = get_payments_settings().paypal_webhook_id
    if environment is None:
        environment = get_settings().python_env

    if webhook_id:
        client = client or get_paypal_client()
        valid = await client.verify_webhook_signature(
            extract_paypal_headers(headers), raw_body, webhook_id
        )
        if not valid:
            logger.error("PayPal webhook: verificación de firma fallida")
            raise WebhookSignatureError("Invalid signature")
        logger.info("PayPal webhook: firma verificada")
        return VerificationMode.VERIFIED

    if environment == "production":
        logger.error("PayPal webhook: PAYPAL_WEBHOOK_ID no configurado en producción, se rechaza el evento")
        raise WebhookVerificationNotConfigured("Webhook verification not configured")

    logger.warning(
        "PayPal webhook: verificación omitida (SOLO DESARROLLO). "
        "Configura PAYPAL_WEBHOOK_ID."
    )
    return VerificationMode.SKIPPED_DEV


__all__ = [
    "WebhookSignatureError",
    "WebhookVerificationNotConfigured",
    "VerificationMode",
    "get_header",
    "extract_paypal_headers",
    "verify_paypal_webhook",
]

# Fin del archivo app/modules/payments/facades/webhooks/verify.py
