# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/transaction_type_enum.py

Tipo de transacción: compra o reembolso.

Autor: CourseHub
Fecha: 19/10/2026
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_str_enum


class TransactionType(StrEnum):
    PURCHASE = "purchase"
    REFUND = "refund"

    @classmethod
    def as_column_type(cls) -> SAEnum:
        return as_str_enum(cls, name="transaction_type")


__all__ = ["TransactionType"]

# Fin del archivo app/modules/payments/enums/transaction_type_enum.py
