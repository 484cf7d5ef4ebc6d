# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/custom_id.py

custom_id de PayPal: único vínculo entre una orden y (usuario, curso).

Formato estricto: "user_<userId>_course_<courseId>" (dígitos ASCII,
coincidencia completa). Cualquier otra forma se rechaza.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

CUSTOM_ID_PATTERN = re.compile(r"user_([0-9]+)_course_([0-9]+)")


@dataclass(frozen=True)
class CustomId:
    user_id: int
    course_id: int

    def __str__(self) -> str:
        return build_custom_id(self.user_id, self.course_id)


def build_custom_id(user_id: int, course_id: int) -> str:
    return f"user_{user_id}_course_{course_id}"


def parse_custom_id(value: object) -> Optional[CustomId]:
    """Devuelve (user_id, course_id) o None si el valor no cumple el formato."""
    if not isinstance(value, str):
        return None
    match = CUSTOM_ID_PATTERN.fullmatch(value)
    if match is None:
        return None
    return CustomId(user_id=int(match.group(1)), course_id=int(match.group(2)))


__all__ = ["CustomId", "CUSTOM_ID_PATTERN", "build_custom_id", "parse_custom_id"]

# Fin del archivo app/modules/payments/facades/webhooks/custom_id.py
