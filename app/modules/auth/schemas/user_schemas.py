# -*- coding: utf-8 -*-
"""
app/modules/auth/schemas/user_schemas.py

Esquemas Pydantic del usuario autenticado.

TelegramUserPayload: campo `user` de initData (JSON enviado por Telegram).
CurrentUser: snapshot del usuario persistido, cacheable en Redis.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TelegramUserPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    first_name: str = ""
    last_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    language_code: Optional[str] = None


class CurrentUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    telegram_id: int
    username: Optional[str] = None
    first_name: str = ""
    last_name: Optional[str] = None
    photo_url: Optional[str] = None
    language_code: Optional[str] = None
    notifications_enabled: bool = True


__all__ = ["TelegramUserPayload", "CurrentUser"]
# Fin del archivo app/modules/auth/schemas/user_schemas.py
