"""Vercel function entrypoint for the submission relay (ASGI app at /api/telegram)."""

import os
import sys

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from relay.api import app  # noqa: E402,F401
from relay.config import configure_logging  # noqa: E402

configure_logging()
