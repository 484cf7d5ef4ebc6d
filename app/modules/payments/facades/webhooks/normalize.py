# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/normalize.py

Parseo de eventos webhook de PayPal a modelos Pydantic tolerantes.

Sólo se tipan los campos que el sistema usa; el resto se conserva
(extra="allow") para logs y reenvío.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class WebhookNormalizationError(ValueError):
    """Body no es JSON válido o no tiene forma de evento PayPal."""


class PayPalAmount(BaseModel):
    model_config = ConfigDict(extra="allow")

    currency_code: Optional[str] = None
    # PayPal envía string ("19.99"); se acepta también número
    value: Any = None


class PayPalRelatedIds(BaseModel):
    model_config = ConfigDict(extra="allow")

    order_id: Optional[str] = None


class PayPalSupplementaryData(BaseModel):
    model_config = ConfigDict(extra="allow")

    related_ids: Optional[PayPalRelatedIds] = None


class PayPalResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    status: Optional[str] = None
    amount: Optional[PayPalAmount] = None
    custom_id: Optional[str] = None
    supplementary_data: Optional[PayPalSupplementaryData] = None
    purchase_units: Optional[list[dict[str, Any]]] = None

    @property
    def order_id(self) -> Optional[str]:
        if self.supplementary_data and self.supplementary_data.related_ids:
            return self.supplementary_data.related_ids.order_id
        return None

    @property
    def amount_value(self) -> Any:
        return self.amount.value if self.amount else None

    @property
    def amount_currency(self) -> Optional[str]:
        return self.amount.currency_code if self.amount else None

    def resolve_custom_id(self) -> Optional[str]:
        """custom_id del recurso o, en órdenes, del primer purchase_unit."""
        if self.custom_id:
            return self.custom_id
        for unit in self.purchase_units or []:
            value = unit.get("custom_id") if isinstance(unit, dict) else None
            if value:
                return value
        return None


class PayPalWebhookEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    event_type: str = ""
    resource_type: Optional[str] = None
    summary: Optional[str] = None
    resource: PayPalResource = Field(default_factory=PayPalResource)

    def log_context(self) -> str:
        return (
            f"event_type={self.event_type} event_id={self.id} "
            f"resource_id={self.resource.id or 'none'} "
            f"custom_id={self.resource.resolve_custom_id() or 'none'}"
        )


def parse_webhook_event(raw_body: bytes) -> PayPalWebhookEvent:
    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise WebhookNormalizationError(f"payload no es JSON válido: {e}") from e
    if not isinstance(data, dict):
        raise WebhookNormalizationError("payload no es un objeto JSON")
    try:
        return PayPalWebhookEvent.model_validate(data)
    except ValidationError as e:
        raise WebhookNormalizationError(f"evento PayPal inválido: {e.error_count()} errores") from e


__all__ = [
    "WebhookNormalizationError",
    "PayPalAmount",
    "PayPalResource",
    "PayPalWebhookEvent",
    "parse_webhook_event",
]

# Fin del archivo app/modules/payments/facades/webhooks/normalize.py
