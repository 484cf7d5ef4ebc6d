# -*- coding: utf-8 -*-
"""
app/shared/utils/http_exceptions.py

Excepciones HTTP de la API de la Mini App. Cada subclase fija su código
de estado y un detalle por defecto; las rutas pasan el mensaje que ve el
cliente.

Autor: CourseHub
Fecha: 19/10/2026
"""

from typing import Any, ClassVar, Dict, Optional

from fastapi import HTTPException, status


class ApiHTTPException(HTTPException):
    status_code_default: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail_default: ClassVar[str] = "Error interno"

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, Any]] = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.detail_default,
            headers=headers,
        )


class BadRequestException(ApiHTTPException):
    """400 - courseId inválido o parámetros mal formados"""
    status_code_default = status.HTTP_400_BAD_REQUEST
    detail_default = "Solicitud inválida"


class UnauthorizedException(ApiHTTPException):
    """401 - initData ausente, inválido o expirado"""
    status_code_default = status.HTTP_401_UNAUTHORIZED
    detail_default = "Invalid Telegram authorization"


class NotFoundException(ApiHTTPException):
    status_code_default = status.HTTP_404_NOT_FOUND
    detail_default = "Recurso no encontrado"


class ConflictException(ApiHTTPException):
    """409 - curso ya comprado"""
    status_code_default = status.HTTP_409_CONFLICT
    detail_default = "Course already purchased"


class BadGatewayException(ApiHTTPException):
    """502 - fallo de PayPal"""
    status_code_default = status.HTTP_502_BAD_GATEWAY
    detail_default = "Error del proveedor de pagos"


__all__ = [
    "ApiHTTPException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "BadGatewayException",
]
# Fin del archivo app/shared/utils/http_exceptions.py
