# -*- coding: utf-8 -*-
"""
app/shared/redis/__init__.py

Cliente Redis async compartido.
"""

from .client import (
    get_async_redis_client,
    close_async_redis_client,
    RedisClientManager,
)

__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "RedisClientManager",
]
