"""Implementação de SessionStore em memória.

Sem expiração e sem lock: a serialização de acesso é feita pelo
InboundDispatcher. O conteúdo é perdido ao reiniciar o processo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from finance_bot.domain.session import (
    AwaitingHumanSession,
    InfoRequestSession,
    MenuSession,
    ParentContactSession,
)
from finance_bot.infra.session_contract import SessionStore, SessionStoreError
from finance_bot.observability.logging import get_logger, mask_sender

if TYPE_CHECKING:
    from finance_bot.domain.session import Session

logger: logging.Logger = get_logger(__name__)

_STORABLE_TYPES = (MenuSession, InfoRequestSession, ParentContactSession, AwaitingHumanSession)


class InMemorySessionStore(SessionStore):
    """Mapa remetente -> sessão mantido no processo."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, sender_id: str) -> Session | None:
        session = self._sessions.get(sender_id)
        if session is None:
            logger.debug(
                "Session not found (in-memory)",
                extra={"sender": mask_sender(sender_id)},
            )
        return session

    def set(self, sender_id: str, session: Session) -> None:  # noqa: A003
        if not sender_id:
            raise SessionStoreError("sender_id vazio")
        if not isinstance(session, _STORABLE_TYPES):
            raise SessionStoreError(f"Tipo de sessão não armazenável: {type(session).__name__}")

        self._sessions[sender_id] = session
        logger.debug(
            "Session saved (in-memory)",
            extra={"sender": mask_sender(sender_id), "step": str(session.step)},
        )

    def delete(self, sender_id: str) -> bool:
        if sender_id in self._sessions:
            del self._sessions[sender_id]
            logger.debug(
                "Session deleted (in-memory)",
                extra={"sender": mask_sender(sender_id)},
            )
            return True
        return False

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, sender_id: object) -> bool:
        return sender_id in self._sessions
