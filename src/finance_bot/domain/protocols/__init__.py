"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from finance_bot.domain.protocols.messaging import MessageSender
from finance_bot.domain.protocols.session_store import SessionStoreProtocol

__all__ = [
    "MessageSender",
    "SessionStoreProtocol",
]
