"""Dispatcher inbound: sessão -> engine -> store -> envio.

Uma mensagem por vez (asyncio.Lock), na ordem de chegada. A sessão é
gravada antes dos envios; as respostas saem em sequência, aguardando
cada envio antes do próximo.
"""

from __future__ import annotations

import asyncio
import logging

from finance_bot.application.dialogue import DialogueEngine, DialogueOutcome, SessionAction
from finance_bot.domain.messages import InboundMessage
from finance_bot.domain.protocols import MessageSender, SessionStoreProtocol
from finance_bot.infra.http import HttpError
from finance_bot.observability.logging import get_logger, mask_sender

logger: logging.Logger = get_logger(__name__)


class InboundDispatcher:
    """Aplica o DialogueEngine sobre o SessionStore e envia as respostas."""

    def __init__(
        self,
        store: SessionStoreProtocol,
        engine: DialogueEngine,
        sender: MessageSender,
    ) -> None:
        self._store = store
        self._engine = engine
        self._sender = sender
        self._lock = asyncio.Lock()

    @property
    def store(self) -> SessionStoreProtocol:
        return self._store

    async def handle(self, message: InboundMessage) -> DialogueOutcome:
        """Processa uma mensagem inteira (transição + envios) sob o lock.

        Raises:
            HttpError: Se o envio de uma resposta falhar; as respostas
                seguintes não são enviadas e a sessão já está gravada.
        """
        async with self._lock:
            session = self._store.get(message.sender_id)
            outcome = self._engine.decide(message, session)
            self._apply(message.sender_id, outcome)
            await self._send_replies(message.sender_id, outcome.replies)
            return outcome

    def _apply(self, sender_id: str, outcome: DialogueOutcome) -> None:
        if outcome.action is SessionAction.SAVE and outcome.session is not None:
            self._store.set(sender_id, outcome.session)
        elif outcome.action is SessionAction.DELETE:
            self._store.delete(sender_id)

    async def _send_replies(self, sender_id: str, replies: tuple[str, ...]) -> None:
        for index, text in enumerate(replies):
            try:
                await self._sender.send_text(sender_id, text)
            except HttpError as exc:
                logger.error(
                    "Reply delivery failed",
                    extra={
                        "sender": mask_sender(sender_id),
                        "reply_index": index,
                        "reply_count": len(replies),
                        "status_code": exc.status_code,
                        "is_retryable": exc.is_retryable,
                    },
                )
                raise
