import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

# ==================== SETTINGS ====================

DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"


class RelaySettings(BaseModel):
    telegram_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_api_base: str = DEFAULT_TELEGRAM_API_BASE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RelaySettings":
        """Build settings from the process environment (.env is loaded once at import)"""
        return cls(
            telegram_token=os.getenv("TELEGRAM_TOKEN") or None,
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID") or None,
            telegram_api_base=os.getenv("TELEGRAM_API_BASE", DEFAULT_TELEGRAM_API_BASE),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Optional[RelaySettings] = None):
    """Set up root logging for an entry point (server, Vercel or Lambda)"""
    settings = settings or RelaySettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
