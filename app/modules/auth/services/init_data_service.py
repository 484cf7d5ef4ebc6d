# -*- coding: utf-8 -*-
"""
app/modules/auth/services/init_data_service.py

Validación de initData de Telegram Mini Apps.

Algoritmo (documentación oficial de Telegram WebApp):
    secret_key = HMAC_SHA256(key="WebAppData", msg=bot_token)
    data_check_string = pares "k=v" ordenados por clave, unidos por "\\n",
                        excluyendo `hash`
    hash esperado = hex(HMAC_SHA256(key=secret_key, msg=data_check_string))

Además:
- auth_date debe estar dentro de la ventana TTL
- cada initData se acepta una sola vez (guard anti-replay, Redis SET NX
  con respaldo en memoria del proceso)

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl

from pydantic import ValidationError

from app.modules.auth.schemas.user_schemas import TelegramUserPayload
from app.shared.cache import CacheKeys, cache_set_if_absent

logger = logging.getLogger(__name__)


class InitDataError(Exception):
    """initData inválido, expirado, sin usuario o reutilizado."""


@dataclass(frozen=True)
class ValidatedInitData:
    user: TelegramUserPayload
    auth_date: int
    data_hash: str
    raw_sha256: str


def _secret_key(bot_token: str) -> bytes:
    return hmac.new(b"WebAppData", bot_token.encode("utf-8"), hashlib.sha256).digest()


def sign_init_data(fields: dict[str, str], bot_token: str) -> str:
    """Calcula el hash de Telegram para `fields` (sin la clave `hash`)."""
    data_check_string = "\n".join(f"{k}={v}" for k, v in sorted(fields.items()) if k != "hash")
    return hmac.new(_secret_key(bot_token), data_check_string.encode("utf-8"), hashlib.sha256).hexdigest()


def validate_init_data(
    init_data: str,
    bot_token: str,
    max_age_seconds: int,
    now: Optional[float] = None,
) -> ValidatedInitData:
    """
    Verifica firma, antigüedad y usuario de un initData.

    Raises:
        InitDataError: ante cualquier fallo de validación.
    """
    if not init_data:
        raise InitDataError("initData vacío")

    pairs = parse_qsl(init_data, keep_blank_values=True, strict_parsing=False)
    fields = dict(pairs)
    received_hash = fields.pop("hash", None)
    if not received_hash:
        raise InitDataError("initData sin hash")

    expected = sign_init_data(fields, bot_token)
    if not hmac.compare_digest(expected, received_hash.lower()):
        raise InitDataError("firma de initData inválida")

    try:
        auth_date = int(fields.get("auth_date", ""))
    except ValueError as e:
        raise InitDataError("auth_date ausente o inválido") from e

    current = time.time() if now is None else now
    if current - auth_date > max_age_seconds:
        raise InitDataError("initData expirado")

    raw_user = fields.get("user")
    if not raw_user:
        raise InitDataError("initData sin usuario")
    try:
        user = TelegramUserPayload.model_validate(json.loads(raw_user))
    except (ValueError, ValidationError) as e:
        raise InitDataError("usuario de initData inválido") from e

    return ValidatedInitData(
        user=user,
        auth_date=auth_date,
        data_hash=received_hash,
        raw_sha256=hashlib.sha256(init_data.encode("utf-8")).hexdigest(),
    )


class InitDataReplayGuard:
    """
    Marca cada initData (por su sha256) como usado durante `ttl` segundos.

    Usa Redis (SET NX EX) si está disponible; el mapa en memoria cubre el
    caso sin Redis y también detecta reutilización dentro del proceso.
    """

    def __init__(self) -> None:
        self._seen: dict[str, float] = {}

    def _cleanup(self, now: float) -> None:
        expired = [h for h, exp in self._seen.items() if exp <= now]
        for h in expired:
            del self._seen[h]

    async def check_and_mark(self, raw_sha256: str, ttl_seconds: int) -> None:
        """Raises InitDataError si el initData ya fue usado."""
        now = time.monotonic()
        self._cleanup(now)
        if raw_sha256 in self._seen:
            raise InitDataError("initData reutilizado")

        created = await cache_set_if_absent(CacheKeys.init_data(raw_sha256), "1", ttl_seconds)
        if created is False:
            raise InitDataError("initData reutilizado")

        self._seen[raw_sha256] = now + ttl_seconds

    def clear(self) -> None:
        self._seen.clear()


replay_guard = InitDataReplayGuard()

__all__ = [
    "InitDataError",
    "ValidatedInitData",
    "sign_init_data",
    "validate_init_data",
    "InitDataReplayGuard",
    "replay_guard",
]
# Fin del archivo app/modules/auth/services/init_data_service.py
