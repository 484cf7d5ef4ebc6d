# -*- coding: utf-8 -*-
"""
app/modules/auth/services/__init__.py
"""

from .init_data_service import (
    InitDataError,
    ValidatedInitData,
    sign_init_data,
    validate_init_data,
    InitDataReplayGuard,
    replay_guard,
)

__all__ = [
    "InitDataError",
    "ValidatedInitData",
    "sign_init_data",
    "validate_init_data",
    "InitDataReplayGuard",
    "replay_guard",
]
