# -*- coding: utf-8 -*-
"""
app/shared/cache/__init__.py

Caché JSON compartida (Redis, fail-open).
"""

from .json_cache import (
    CacheKeys,
    cache_get_json,
    cache_set_json,
    cache_delete,
    cache_set_if_absent,
)

__all__ = [
    "CacheKeys",
    "cache_get_json",
    "cache_set_json",
    "cache_delete",
    "cache_set_if_absent",
]
