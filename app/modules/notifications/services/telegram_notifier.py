# -*- coding: utf-8 -*-
"""
app/modules/notifications/services/telegram_notifier.py

Mensajería al usuario vía Telegram Bot API (sendMessage / editMessageText).

- send_purchase_processing(): aviso "procesando", devuelve message_id
  para editarlo cuando llegue la captura.
- send_purchase_confirmation(): edita el aviso previo si existe; si no
  (o si la edición falla) envía uno nuevo.

Sin TELEGRAM_BOT_TOKEN, o con notifications_enabled=False, las llamadas
son no-op y devuelven None. Los errores de la API se lanzan como
TelegramNotificationError; el llamador los envuelve con run_best_effort.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class TelegramNotificationError(RuntimeError):
    """La Bot API respondió con error o no fue alcanzable."""


@dataclass(frozen=True)
class NotificationTarget:
    user_id: int
    telegram_id: int
    notifications_enabled: bool = True


def processing_text(course_title: str) -> str:
    return (
        f"⏳ Estamos procesando tu compra de <b>{html.escape(course_title)}</b>.\n"
        "Te avisaremos en cuanto se confirme el pago."
    )


def confirmation_text(course_title: str) -> str:
    return (
        f"✅ ¡Compra confirmada! Ya tienes acceso a <b>{html.escape(course_title)}</b>.\n"
        "Ábrelo desde «Mis cursos»."
    )


class TelegramNotifier:
    def __init__(
        self,
        bot_token: Optional[str] = None,
        api_base: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if bot_token is None or api_base is None:
            from app.shared.config import get_settings
            settings = get_settings()
            bot_token = bot_token if bot_token is not None else settings.telegram_bot_token.get_secret_value()
            api_base = api_base or settings.telegram_api_base
        self._bot_token = bot_token
        self._api_base = api_base.rstrip("/")
        self._http = httpx.AsyncClient(timeout=TELEGRAM_TIMEOUT, transport=transport)

    @property
    def enabled(self) -> bool:
        return bool(self._bot_token)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._api_base}/bot{self._bot_token}/{method}"
        try:
            response = await self._http.post(url, json=payload)
        except httpx.HTTPError as e:
            raise TelegramNotificationError(f"{method}: {type(e).__name__}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise TelegramNotificationError(f"{method}: HTTP {response.status_code} sin JSON") from e

        if response.status_code != 200 or not data.get("ok"):
            raise TelegramNotificationError(
                f"{method}: HTTP {response.status_code} - {data.get('description', 'unknown error')}"
            )
        return data.get("result") or {}

    async def send_message(self, chat_id: int, text: str) -> int:
        result = await self._call(
            "sendMessage",
            {"chat_id": chat_id, "text": text, "parse_mode": "HTML"},
        )
        return int(result.get("message_id", 0))

    async def edit_message(self, chat_id: int, message_id: int, text: str) -> None:
        await self._call(
            "editMessageText",
            {"chat_id": chat_id, "message_id": message_id, "text": text, "parse_mode": "HTML"},
        )

    def _should_skip(self, target: NotificationTarget) -> bool:
        if not self.enabled:
            logger.debug("[notify] TELEGRAM_BOT_TOKEN vacío, notificación omitida")
            return True
        if not target.notifications_enabled:
            logger.debug(f"[notify] user={target.user_id} tiene notificaciones desactivadas")
            return True
        return False

    async def send_purchase_processing(self, target: NotificationTarget, course_title: str) -> Optional[int]:
        if self._should_skip(target):
            return None
        message_id = await self.send_message(target.telegram_id, processing_text(course_title))
        logger.info(f"[notify] aviso de compra en proceso enviado user={target.user_id} msg={message_id}")
        return message_id

    async def send_purchase_confirmation(
        self,
        target: NotificationTarget,
        course_title: str,
        message_id: Optional[int] = None,
    ) -> Optional[int]:
        if self._should_skip(target):
            return None

        text = confirmation_text(course_title)
        if message_id:
            try:
                await self.edit_message(target.telegram_id, message_id, text)
                logger.info(f"[notify] confirmación editada user={target.user_id} msg={message_id}")
                return message_id
            except TelegramNotificationError as e:
                logger.info(f"[notify] no se pudo editar msg={message_id} ({e}); se envía uno nuevo")

        new_id = await self.send_message(target.telegram_id, text)
        logger.info(f"[notify] confirmación enviada user={target.user_id} msg={new_id}")
        return new_id


_notifier: Optional[TelegramNotifier] = None


def get_telegram_notifier() -> TelegramNotifier:
    global _notifier
    if _notifier is None:
        _notifier = TelegramNotifier()
    return _notifier


def set_telegram_notifier(notifier: Optional[TelegramNotifier]) -> None:
    global _notifier
    _notifier = notifier


async def close_telegram_notifier() -> None:
    global _notifier
    if _notifier is not None:
        await _notifier.aclose()
    _notifier = None


__all__ = [
    "TelegramNotifier",
    "TelegramNotificationError",
    "NotificationTarget",
    "get_telegram_notifier",
    "set_telegram_notifier",
    "close_telegram_notifier",
]
# Fin del archivo app/modules/notifications/services/telegram_notifier.py
