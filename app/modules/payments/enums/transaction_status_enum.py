# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/transaction_status_enum.py

Estados de una transacción.

    pending  -> creada al generar la orden PayPal
    success  -> captura completada (misma fila o fila nueva)
    failed   -> captura denegada (siempre fila nueva)
    refunded -> reembolso (siempre fila nueva)

Autor: CourseHub
Fecha: 19/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_str_enum


class TransactionStatus(StrEnum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    REFUNDED = "refunded"

    @classmethod
    def as_column_type(cls) -> SAEnum:
        return as_str_enum(cls, name="transaction_status")


__all__ = ["TransactionStatus"]

# Fin del archivo app/modules/payments/enums/transaction_status_enum.py
