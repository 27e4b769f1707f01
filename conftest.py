import pytest
from fastapi.testclient import TestClient

from relay.api import app, get_notifier, get_settings
from relay.config import RelaySettings


class RecordingNotifier:
    """Stands in for Telegram: remembers every message, optionally fails on the Nth call"""

    def __init__(self, fail_on_call=None):
        self.sent = []
        self.fail_on_call = fail_on_call

    async def send_message(self, chat_id, text, parse_mode="HTML"):
        if self.fail_on_call is not None and len(self.sent) + 1 == self.fail_on_call:
            raise RuntimeError("telegram unavailable")
        self.sent.append({"chat_id": chat_id, "text": text, "parse_mode": parse_mode})


@pytest.fixture
def settings():
    return RelaySettings(telegram_token="123:test-token", telegram_chat_id="-1001")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(settings, notifier):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def submission_payload():
    return {
        "name": "Ana Lima",
        "email": "ana@example.com",
        "score": 8,
        "total": 10,
        "percentage": 80,
        "timestamp": "2026-10-18T14:05:09.000Z",
        "results": [
            {
                "questionText": "Look at those clouds! It ___ rain.",
                "selected": "is going to",
                "correct": "is going to",
                "isCorrect": True,
                "type": "GT",
            },
            {
                "questionText": "I think she ___ pass the exam next week.",
                "selected": "is passing",
                "correct": "will",
                "isCorrect": False,
                "type": "WL",
            },
        ],
    }
