# -*- coding: utf-8 -*-
"""
app/shared/utils/currency.py

Normalización de códigos de moneda y montos.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

_CENT = Decimal("0.01")


def normalize_currency(value: Optional[str], fallback: str) -> str:
    """Recorta, aplica el fallback si queda vacío y pasa a mayúsculas."""
    trimmed = value.strip() if isinstance(value, str) else ""
    return (trimmed or fallback).upper()


def to_amount(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """
    Convierte un monto (str/float/int/Decimal) a Decimal con 2 decimales.

    Valores ausentes o no numéricos devuelven `default`.
    """
    if value is None or value == "":
        return default.quantize(_CENT)
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            return default.quantize(_CENT)
        # quantize falla si el resultado excede la precisión del contexto (p. ej. "1e30")
        return amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return default.quantize(_CENT)


def format_amount(value: Any) -> str:
    """Formato '12.50' aceptado por la API de PayPal."""
    return f"{to_amount(value):.2f}"


__all__ = ["normalize_currency", "to_amount", "format_amount"]
# Fin del archivo app/shared/utils/currency.py
