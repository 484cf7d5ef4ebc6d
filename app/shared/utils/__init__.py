# -*- coding: utf-8 -*-
"""
app/shared/utils/__init__.py

Exportación de utilidades comunes.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .http_exceptions import (
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    BadGatewayException,
)
from .json_response import UTF8JSONResponse, json_response_utf8
from .currency import normalize_currency, to_amount, format_amount
from .best_effort import BestEffortResult, run_best_effort

__all__ = [
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "BadGatewayException",
    "UTF8JSONResponse",
    "json_response_utf8",
    "normalize_currency",
    "to_amount",
    "format_amount",
    "BestEffortResult",
    "run_best_effort",
]
