# -*- coding: utf-8 -*-
"""
app/modules/payments/schemas/__init__.py

Esquemas Pydantic del módulo Payments.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .transaction_schemas import PageInfo, TransactionListResponse, TransactionOut

__all__ = ["TransactionOut", "PageInfo", "TransactionListResponse"]

# Fin del archivo app/modules/payments/schemas/__init__.py
