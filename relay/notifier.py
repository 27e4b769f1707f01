import logging
from typing import Optional, Protocol

import httpx

from relay.config import RelaySettings

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a message could not be delivered to the chat"""


class Notifier(Protocol):
    async def send_message(self, chat_id: str, text: str, parse_mode: str = "HTML") -> None:
        ...


class TelegramNotifier:
    """
    Minimal Telegram Bot API client: only sendMessage is needed.

    A fresh httpx.AsyncClient is opened per call unless one is injected,
    so nothing is shared between requests.
    """

    def __init__(self, settings: RelaySettings, client: Optional[httpx.AsyncClient] = None):
        self.token = settings.telegram_token
        self.api_base = settings.telegram_api_base.rstrip("/")
        self.client = client

    def _method_url(self, method: str) -> str:
        return f"{self.api_base}/bot{self.token}/{method}"

    async def send_message(self, chat_id: str, text: str, parse_mode: str = "HTML") -> None:
        if not self.token:
            raise NotificationError("TELEGRAM_TOKEN is not configured")
        if not chat_id:
            raise NotificationError("TELEGRAM_CHAT_ID is not configured")

        payload = {"chat_id": chat_id, "text": text, "parse_mode": parse_mode}

        try:
            if self.client is not None:
                response = await self.client.post(self._method_url("sendMessage"), json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self._method_url("sendMessage"), json=payload)
        except httpx.HTTPError as err:
            raise NotificationError(f"Telegram request failed: {err.__class__.__name__}") from err

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("ok", False):
            description = body.get("description") or response.reason_phrase
            raise NotificationError(
                f"Telegram API error {response.status_code}: {description}"
            )

        logger.debug("Delivered message to chat %s (%d chars)", chat_id, len(text))
