"""Testes para o InboundDispatcher (store + engine + envio)."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from finance_bot.application.dialogue import DialogueEngine, SessionAction
from finance_bot.application.dispatcher import InboundDispatcher
from finance_bot.domain import replies
from finance_bot.domain.messages import InboundMessage
from finance_bot.domain.protocols import MessageSender
from finance_bot.domain.session import (
    AwaitingHumanSession,
    DialogueStep,
    MenuSession,
    ParentContactSession,
    StudentCollection,
)
from finance_bot.infra.http import HttpError
from finance_bot.infra.session_store_memory import InMemorySessionStore

CUSTOMER = "201001112233"
OTHER_CUSTOMER = "201009998877"


def _text(text: str, sender_id: str = CUSTOMER) -> InboundMessage:
    return InboundMessage(sender_id=sender_id, text=text)


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def sender() -> AsyncMock:
    return AsyncMock(spec=MessageSender)


@pytest.fixture()
def dispatcher(store: InMemorySessionStore, sender: AsyncMock) -> InboundDispatcher:
    return InboundDispatcher(store=store, engine=DialogueEngine(), sender=sender)


def _parent_at_last_id() -> ParentContactSession:
    students = StudentCollection(count=1).with_name("Sara").with_year("Y3")
    return ParentContactSession(step=DialogueStep.COLLECT_PARENT_STUDENT_ID, students=students)


class TestInboundDispatcher:
    """Testes para InboundDispatcher.handle."""

    @pytest.mark.asyncio
    async def test_first_message_saves_session_and_sends_menu(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """Primeira mensagem grava a sessão e envia o menu."""
        outcome = await dispatcher.handle(_text("hi"))

        assert outcome.action is SessionAction.SAVE
        assert store.get(CUSTOMER) == MenuSession(step=DialogueStep.SERVICE_SELECTION)
        sender.send_text.assert_awaited_once_with(CUSTOMER, replies.WELCOME)

    @pytest.mark.asyncio
    async def test_delete_outcome_removes_session(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore
    ) -> None:
        """Opção 3 apaga a sessão do store."""
        await dispatcher.handle(_text("hi"))
        await dispatcher.handle(_text("3"))

        assert store.get(CUSTOMER) is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_ignored_message_sends_nothing(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """Mensagem ignorada não altera o store nem envia."""
        await dispatcher.handle(InboundMessage(sender_id=CUSTOMER))

        assert len(store) == 0
        sender.send_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_multi_reply_is_sent_in_order(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """Respostas múltiplas saem na ordem produzida pelo engine."""
        store.set(CUSTOMER, _parent_at_last_id())

        await dispatcher.handle(_text("2001"))

        assert sender.send_text.await_args_list[0] == call(CUSTOMER, replies.PARENT_CONTACT_INFO)
        second = sender.send_text.await_args_list[1].args[1]
        assert second.startswith("📋 **Student Details**")
        assert sender.send_text.await_count == 2
        assert isinstance(store.get(CUSTOMER), AwaitingHumanSession)

    @pytest.mark.asyncio
    async def test_session_is_stored_before_sending(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """O store já reflete a transição quando o envio acontece."""
        seen: list[object] = []

        async def _capture(to: str, text: str) -> None:
            seen.append(store.get(to))

        sender.send_text.side_effect = _capture

        await dispatcher.handle(_text("hi"))

        assert seen == [MenuSession(step=DialogueStep.SERVICE_SELECTION)]

    @pytest.mark.asyncio
    async def test_send_failure_propagates_after_store_update(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """Falha de envio propaga HttpError; a sessão já foi gravada."""
        sender.send_text.side_effect = HttpError("HTTP 500", status_code=500, is_retryable=True)

        with pytest.raises(HttpError):
            await dispatcher.handle(_text("hi"))

        assert store.get(CUSTOMER) == MenuSession(step=DialogueStep.SERVICE_SELECTION)

    @pytest.mark.asyncio
    async def test_failure_stops_remaining_replies(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore, sender: AsyncMock
    ) -> None:
        """Após falha, as respostas seguintes não são enviadas."""
        store.set(CUSTOMER, _parent_at_last_id())
        sender.send_text.side_effect = HttpError("HTTP 503", status_code=503)

        with pytest.raises(HttpError):
            await dispatcher.handle(_text("2001"))

        assert sender.send_text.await_count == 1

    @pytest.mark.asyncio
    async def test_messages_are_processed_one_at_a_time(
        self, dispatcher: InboundDispatcher, sender: AsyncMock
    ) -> None:
        """Mensagens concorrentes não intercalam seus envios."""
        events: list[tuple[str, str]] = []

        async def _slow_send(to: str, text: str) -> None:
            events.append(("start", to))
            await asyncio.sleep(0.01)
            events.append(("end", to))

        sender.send_text.side_effect = _slow_send

        await asyncio.gather(
            dispatcher.handle(_text("hi", CUSTOMER)),
            dispatcher.handle(_text("hi", OTHER_CUSTOMER)),
        )

        assert events == [
            ("start", CUSTOMER),
            ("end", CUSTOMER),
            ("start", OTHER_CUSTOMER),
            ("end", OTHER_CUSTOMER),
        ]

    @pytest.mark.asyncio
    async def test_senders_have_independent_sessions(
        self, dispatcher: InboundDispatcher, store: InMemorySessionStore
    ) -> None:
        """Cada remetente tem sua própria sessão."""
        await dispatcher.handle(_text("hi", CUSTOMER))
        await dispatcher.handle(_text("1", CUSTOMER))
        await dispatcher.handle(_text("hi", OTHER_CUSTOMER))

        assert store.get(CUSTOMER).step is DialogueStep.COLLECT_INFO_STUDENT_COUNT
        assert store.get(OTHER_CUSTOMER).step is DialogueStep.SERVICE_SELECTION
        assert len(store) == 2
