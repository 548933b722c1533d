from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from finance_bot.api.app import create_app
from finance_bot.config.settings import get_settings
from tests.helpers.fakes import RecordingSender


@pytest.fixture()
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch, sender: RecordingSender):
    monkeypatch.setenv("WHATSAPP_VERIFY_TOKEN", "test-token")
    monkeypatch.delenv("WHATSAPP_WEBHOOK_SECRET", raising=False)
    get_settings.cache_clear()
    app = create_app(sender=sender)
    with TestClient(app) as test_client:
        yield test_client
