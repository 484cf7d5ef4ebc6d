# -*- coding: utf-8 -*-
"""
app/shared/cache/json_cache.py

Caché JSON sobre Redis con semántica fail-open.

Si Redis no está configurado o falla, las lecturas devuelven None y las
escrituras/borrados se ignoran con un warning: la caché nunca rompe
una operación de negocio.

Claves:
    CacheKeys.user(telegram_id)      -> "user:{telegram_id}"
    CacheKeys.user_courses(user_id)  -> "user:{user_id}:courses"
    CacheKeys.init_data(hash)        -> "telegram:init-data:{hash}"

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from redis.exceptions import RedisError

from app.shared.redis import get_async_redis_client

logger = logging.getLogger(__name__)


class CacheKeys:
    @staticmethod
    def user(telegram_id: int) -> str:
        return f"user:{telegram_id}"

    @staticmethod
    def user_courses(user_id: int) -> str:
        return f"user:{user_id}:courses"

    @staticmethod
    def init_data(data_hash: str) -> str:
        return f"telegram:init-data:{data_hash}"


async def cache_get_json(key: str) -> Optional[Any]:
    client = await get_async_redis_client()
    if client is None:
        return None
    try:
        raw = await client.get(key)
    except (RedisError, OSError) as e:
        logger.warning(f"[cache] GET {key} falló: {e}")
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"[cache] valor corrupto en {key}; se ignora")
        return None


async def cache_set_json(key: str, value: Any, ttl_seconds: int) -> None:
    client = await get_async_redis_client()
    if client is None:
        return
    try:
        await client.set(key, json.dumps(value, default=str), ex=ttl_seconds)
    except (RedisError, OSError) as e:
        logger.warning(f"[cache] SET {key} falló: {e}")


async def cache_delete(*keys: str) -> None:
    if not keys:
        return
    client = await get_async_redis_client()
    if client is None:
        return
    try:
        await client.delete(*keys)
    except (RedisError, OSError) as e:
        logger.warning(f"[cache] DEL {keys} falló: {e}")


async def cache_set_if_absent(key: str, value: str, ttl_seconds: int) -> Optional[bool]:
    """
    SET NX EX.

    Returns:
        True si se creó, False si ya existía, None si Redis no está disponible.
    """
    client = await get_async_redis_client()
    if client is None:
        return None
    try:
        created = await client.set(key, value, ex=ttl_seconds, nx=True)
    except (RedisError, OSError) as e:
        logger.warning(f"[cache] SET NX {key} falló: {e}")
        return None
    return bool(created)


__all__ = [
    "CacheKeys",
    "cache_get_json",
    "cache_set_json",
    "cache_delete",
    "cache_set_if_absent",
]
# Fin del archivo app/shared/cache/json_cache.py
