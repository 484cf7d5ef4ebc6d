# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/dto.py

DTOs para el flujo de compra de un curso con PayPal.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreatePurchaseRequest(BaseModel):
    """Payload de POST /purchase/create."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: int = Field(alias="courseId", description="ID del curso a comprar.")


class PurchaseOrderData(BaseModel):
    """Datos que el frontend usa para redirigir al comprador a PayPal."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")
    approve_url: str = Field(alias="approveUrl")
    price: float = Field(description="Precio del curso según el catálogo.")
    amount: str = Field(description="Monto enviado a PayPal, con dos decimales.")
    currency: str


class CreatePurchaseResponse(BaseModel):
    success: bool = True
    data: PurchaseOrderData


__all__ = ["CreatePurchaseRequest", "PurchaseOrderData", "CreatePurchaseResponse"]

# Fin del archivo app/modules/payments/facades/checkout/dto.py
