# -*- coding: utf-8 -*-
"""
app/modules/auth/dependencies.py

Dependencia de autenticación por initData de Telegram para FastAPI.

Provee:
- get_current_user: valida el header X-Telegram-Init-Data, aplica el
  guard anti-replay y devuelve el usuario persistido (get-or-create),
  cacheado en Redis durante USER_CACHE_TTL segundos.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.repositories.user_repository import UserRepository
from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.auth.services.init_data_service import (
    InitDataError,
    replay_guard,
    validate_init_data,
)
from app.shared.cache import CacheKeys, cache_get_json, cache_set_json
from app.shared.config import get_settings
from app.shared.database import get_db
from app.shared.utils.http_exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

USER_CACHE_TTL = 900


async def get_current_user(
    x_telegram_init_data: Optional[str] = Header(default=None, alias="X-Telegram-Init-Data"),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Dependencia de autenticación para endpoints de la Mini App.

    Raises:
        HTTPException 401: initData ausente, inválido, expirado o reutilizado.
        HTTPException 500: bot token no configurado.
    """
    if not x_telegram_init_data:
        logger.warning("[auth] header X-Telegram-Init-Data ausente")
        raise UnauthorizedException("Telegram authorization required")

    settings = get_settings()
    bot_token = settings.telegram_bot_token.get_secret_value()
    if not bot_token:
        logger.error("[auth] TELEGRAM_BOT_TOKEN no configurado")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    ttl = settings.telegram_init_data_ttl
    try:
        validated = validate_init_data(x_telegram_init_data, bot_token, ttl)
        await replay_guard.check_and_mark(validated.raw_sha256, ttl)
    except InitDataError as e:
        logger.warning(f"[auth] initData rechazado: {e}")
        raise UnauthorizedException("Invalid Telegram authorization") from e

    telegram_id = validated.user.id
    cache_key = CacheKeys.user(telegram_id)
    cached = await cache_get_json(cache_key)
    if cached:
        return CurrentUser.model_validate(cached)

    user = await UserRepository(db).get_or_create(validated.user)
    await db.commit()

    current = CurrentUser.model_validate(user)
    await cache_set_json(cache_key, current.model_dump(), USER_CACHE_TTL)
    logger.debug(f"[auth] usuario autenticado telegram_id={telegram_id} user_id={current.id}")
    return current


__all__ = ["get_current_user", "USER_CACHE_TTL"]
# Fin del archivo app/modules/auth/dependencies.py
