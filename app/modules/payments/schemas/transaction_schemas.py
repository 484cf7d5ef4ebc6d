# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/transaction_schemas.py

Esquemas del historial de transacciones del usuario.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TransactionOut(BaseModel):
    """
    Transacción tal como la muestra la Mini App.

    - title: título del curso, "Purchase" si no se conoce o
      "Payment Failed" para intentos fallidos.
    - amount: con signo; negativo en reembolsos, 0.00 en fallidos.
    """

    id: int
    title: str
    date: str
    amount: str
    currency: str
    status: str
    type: str


class PageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    has_more: bool = Field(alias="hasMore")


class TransactionListResponse(BaseModel):
    success: bool = True
    data: List[TransactionOut]
    pagination: PageInfo


__all__ = ["TransactionOut", "PageInfo", "TransactionListResponse"]

# Fin del archivo app/modules/payments/schemas/transaction_schemas.py
