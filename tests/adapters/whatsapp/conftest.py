"""Fixtures para testes do adapter WhatsApp."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from finance_bot.adapters.whatsapp.http_client import WhatsAppHttpClient


@pytest.fixture()
def mock_http_client() -> AsyncMock:
    """WhatsAppHttpClient mockado devolvendo um wamid válido."""
    client = AsyncMock(spec=WhatsAppHttpClient)
    client.send_message.return_value = "wamid.TEST_MSG_ID_12345"
    return client
