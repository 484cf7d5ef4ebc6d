# -*- coding: utf-8 -*-
"""
app/shared/utils/json_response.py

Respuestas JSON con `charset=utf-8` explícito. UTF8JSONResponse es la
default_response_class de la app; json_response_utf8 se usa en los
exception handlers.

Autor: CourseHub
Fecha: 19/10/2026
"""

from typing import Any, Mapping, Optional

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
) -> UTF8JSONResponse:
    """Títulos de cursos y mensajes con acentos llegan sin mojibake."""
    return UTF8JSONResponse(content=content, status_code=status_code, headers=headers)


__all__ = ["UTF8JSONResponse", "json_response_utf8"]
# Fin del archivo app/shared/utils/json_response.py
