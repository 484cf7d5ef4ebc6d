# -*- coding: utf-8 -*-
"""
app/shared/redis/client.py

Cliente Redis async compartido (singleton).
Usado por la caché JSON y por el guard anti-replay de initData.

Features:
- Conexión perezosa (no bloquea en import)
- Un único cliente para todos los consumidores
- Best-effort: devuelve None si Redis no está disponible (fail-open)

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisClientManager:
    """
    Gestiona un único cliente Redis async.

    Inicialización perezosa; si Redis no responde queda marcado como
    no disponible y get_client() devuelve None.
    """

    _instance: Optional["RedisClientManager"] = None

    @classmethod
    def get_instance(cls) -> "RedisClientManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset del singleton (tests). No cierra el cliente."""
        cls._instance = None

    def __init__(self, redis_url: Optional[str] = None):
        if redis_url is None:
            from app.shared.config import get_settings
            redis_url = get_settings().redis_url
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None
        self._connected: Optional[bool] = None  # None = no intentado
        self._connect_lock: Optional[asyncio.Lock] = None

        if not self._redis_url:
            logger.debug("RedisClientManager: REDIS_URL no configurado pid=%d", os.getpid())

    @property
    def is_configured(self) -> bool:
        return bool(self._redis_url)

    @property
    def is_connected(self) -> bool:
        return self._connected is True

    async def get_client(self) -> Optional[aioredis.Redis]:
        """
        Devuelve el cliente (conexión perezosa) o None.

        Nunca lanza excepciones.
        """
        if self._connected is not None:
            return self._client if self._connected else None

        if not self.is_configured:
            self._connected = False
            return None

        if self._connect_lock is None:
            self._connect_lock = asyncio.Lock()

        async with self._connect_lock:
            if self._connected is not None:
                return self._client if self._connected else None

            try:
                self._client = aioredis.from_url(
                    self._redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                await self._client.ping()
                self._connected = True
                logger.info("RedisClientManager: conectado pid=%d", os.getpid())
                return self._client
            except (RedisError, OSError) as e:
                logger.warning("RedisClientManager: fallo de conexión: %s", str(e))
                self._connected = False
                self._client = None
                return None

    async def ping(self) -> bool:
        client = await self.get_client()
        if not client:
            return False
        try:
            await client.ping()
            return True
        except (RedisError, OSError) as e:
            logger.warning("RedisClientManager: ping falló: %s", str(e))
            return False

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._client.aclose()
            except (RedisError, OSError) as e:
                logger.warning("RedisClientManager: error al cerrar: %s", str(e))
            finally:
                self._client = None
                self._connected = None


async def get_async_redis_client() -> Optional[aioredis.Redis]:
    """Cliente Redis canónico o None si no está disponible."""
    return await RedisClientManager.get_instance().get_client()


async def close_async_redis_client() -> None:
    await RedisClientManager.get_instance().close()


__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "RedisClientManager",
]
# Fin del archivo app/shared/redis/client.py
