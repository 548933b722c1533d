"""Engine de diálogo: (mensagem, sessão) -> (nova sessão, respostas).

- Puro: não acessa store nem transporte; o dispatcher aplica o resultado
- Determinístico: mesma entrada, mesmo DialogueOutcome
- Passo desconhecido ou inconsistente com o fluxo => reset defensivo
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from finance_bot.application.classifier import MessageKind, classify
from finance_bot.application.records import (
    INFO_RECORD_STEPS,
    PARENT_RECORD_STEPS,
    RecordCollector,
)
from finance_bot.domain import replies
from finance_bot.domain.messages import InboundMessage
from finance_bot.domain.session import (
    INFO_REQUEST_STEPS,
    MENU_STEPS,
    PARENT_CONTACT_STEPS,
    AwaitingHumanSession,
    DialogueStep,
    InfoRequestSession,
    MenuSession,
    ParentContactSession,
    ReceiptSubmissionSession,
    Requirement,
    Session,
    SupplierSession,
)
from finance_bot.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_REQUIREMENT_CHOICES: dict[str, Requirement] = {
    "1": Requirement.PAYMENT_ORDER,
    "2": Requirement.PAYMENT_LINK,
    "3": Requirement.OTHER,
}

_FLOW_SESSION_TYPES: tuple[tuple[frozenset[DialogueStep], type], ...] = (
    (MENU_STEPS, MenuSession),
    (INFO_REQUEST_STEPS, InfoRequestSession),
    (PARENT_CONTACT_STEPS, ParentContactSession),
)


class SessionAction(StrEnum):
    """O que o dispatcher deve fazer com a sessão."""

    IGNORE = "ignore"
    SAVE = "save"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class DialogueOutcome:
    """Resultado de uma decisão do engine.

    replies é ordenado: o transporte deve enviar na mesma ordem.
    """

    action: SessionAction
    session: Session | None = None
    replies: tuple[str, ...] = ()

    @classmethod
    def ignore(cls) -> DialogueOutcome:
        return cls(action=SessionAction.IGNORE)

    @classmethod
    def save(cls, session: Session, *texts: str) -> DialogueOutcome:
        return cls(action=SessionAction.SAVE, session=session, replies=texts)

    @classmethod
    def delete(cls, *texts: str) -> DialogueOutcome:
        return cls(action=SessionAction.DELETE, replies=texts)


def _expected_session_type(step: DialogueStep) -> type | None:
    for steps, session_type in _FLOW_SESSION_TYPES:
        if step in steps:
            return session_type
    return None


class DialogueEngine:
    """Máquina de estados do atendimento do Finance Department."""

    def __init__(self, student_count_min: int = 1, student_count_max: int = 10) -> None:
        self._info_collector = RecordCollector(
            INFO_RECORD_STEPS, student_count_min, student_count_max
        )
        self._parent_collector = RecordCollector(
            PARENT_RECORD_STEPS, student_count_min, student_count_max
        )
        self._handlers: dict[DialogueStep, Callable[[Any, str], DialogueOutcome]] = {
            DialogueStep.INITIAL: self._initial,
            DialogueStep.SERVICE_SELECTION: self._service_selection,
            DialogueStep.SELECT_CONTACT_TYPE: self._select_contact_type,
            DialogueStep.COLLECT_INFO_STUDENT_COUNT: self._info_student_count,
            DialogueStep.COLLECT_NAME: self._info_student_field,
            DialogueStep.COLLECT_YEAR: self._info_student_field,
            DialogueStep.COLLECT_ID: self._info_student_field,
            DialogueStep.COLLECT_REQUIREMENT: self._collect_requirement,
            DialogueStep.COLLECT_STUDENT_COUNT: self._parent_student_count,
            DialogueStep.COLLECT_PARENT_STUDENT_NAME: self._parent_student_field,
            DialogueStep.COLLECT_PARENT_STUDENT_YEAR: self._parent_student_field,
            DialogueStep.COLLECT_PARENT_STUDENT_ID: self._parent_student_field,
        }

    @property
    def handled_steps(self) -> frozenset[DialogueStep]:
        """Passos com handler na tabela (handoff é tratado pelo classificador)."""
        return frozenset(self._handlers)

    def decide(self, message: InboundMessage, session: Session | None) -> DialogueOutcome:
        """Classifica a mensagem e executa a transição do passo atual."""
        kind = classify(message, session)

        if kind is MessageKind.IGNORED:
            logger.debug(
                "Inbound ignored",
                extra={
                    "self_originated": message.is_self_originated,
                    "awaiting_human": isinstance(session, AwaitingHumanSession),
                },
            )
            return DialogueOutcome.ignore()

        if kind is MessageKind.OPERATOR_RESTART:
            logger.info("Assistant reactivated by operator")
            return DialogueOutcome.save(MenuSession(), replies.REACTIVATED)

        if kind is MessageKind.PAYMENT_PROOF:
            logger.info(
                "Payment proof acknowledged",
                extra={"has_attachment": message.has_attachment},
            )
            return DialogueOutcome.delete(replies.RECEIPT_ACKNOWLEDGED)

        return self._dispatch_step(session or MenuSession(), message.text or "")

    def _dispatch_step(self, session: Session, text: str) -> DialogueOutcome:
        handler = self._handlers.get(session.step)
        expected = _expected_session_type(session.step)
        if handler is None or expected is None or not isinstance(session, expected):
            return self._reset(session)
        return handler(session, text)

    def _reset(self, session: Session) -> DialogueOutcome:
        logger.warning(
            "Unrecognized session step, resetting",
            extra={"step": str(session.step), "session_kind": session.kind},
        )
        return DialogueOutcome.save(MenuSession(), replies.START_OVER)

    # === Menu ===

    def _initial(self, session: MenuSession, text: str) -> DialogueOutcome:
        return DialogueOutcome.save(
            session.model_copy(update={"step": DialogueStep.SERVICE_SELECTION}),
            replies.WELCOME,
        )

    def _service_selection(self, session: MenuSession, text: str) -> DialogueOutcome:
        if text == "1":
            return DialogueOutcome.save(InfoRequestSession(), replies.INFO_STUDENT_COUNT_PROMPT)
        if text == "2":
            return DialogueOutcome.save(
                AwaitingHumanSession(origin=ReceiptSubmissionSession()),
                replies.RECEIPT_INSTRUCTIONS,
            )
        if text == "3":
            return DialogueOutcome.delete(replies.PAYMENT_PLANS)
        if text == "4":
            return DialogueOutcome.save(
                session.model_copy(update={"step": DialogueStep.SELECT_CONTACT_TYPE}),
                replies.CONTACT_TYPE_PROMPT,
            )
        return DialogueOutcome.save(session, replies.INVALID_SERVICE_CHOICE)

    def _select_contact_type(self, session: MenuSession, text: str) -> DialogueOutcome:
        if text == "1":
            return DialogueOutcome.save(
                ParentContactSession(), replies.PARENT_STUDENT_COUNT_PROMPT
            )
        if text == "2":
            handoff = AwaitingHumanSession(origin=SupplierSession())
            logger.info(
                "Team contact requested, bot stopped",
                extra={"contact_type": handoff.contact_type},
            )
            return DialogueOutcome.save(handoff, replies.SUPPLIER_CONTACT_INFO)
        return DialogueOutcome.save(session, replies.INVALID_CONTACT_TYPE)

    # === Pedido de informação ===

    def _info_student_count(self, session: InfoRequestSession, text: str) -> DialogueOutcome:
        return self._start_collection(session, text, self._info_collector)

    def _info_student_field(self, session: InfoRequestSession, text: str) -> DialogueOutcome:
        return self._collect_field(
            session, text, self._info_collector, on_complete=self._info_students_done
        )

    def _info_students_done(self, session: InfoRequestSession) -> DialogueOutcome:
        return DialogueOutcome.save(
            session.model_copy(update={"step": DialogueStep.COLLECT_REQUIREMENT}),
            replies.REQUIREMENT_PROMPT,
        )

    def _collect_requirement(self, session: InfoRequestSession, text: str) -> DialogueOutcome:
        requirement = _REQUIREMENT_CHOICES.get(text)
        if requirement is None:
            return DialogueOutcome.save(session, replies.INVALID_REQUIREMENT)
        if session.students is None:
            return self._reset(session)

        logger.info(
            "Information request completed, bot stopped for human intervention",
            extra={
                "student_count": session.students.count,
                "requirement": requirement.value,
            },
        )
        summary = replies.request_summary(
            session.students.records,
            requirement.value,
            recorded=requirement is not Requirement.OTHER,
        )
        return DialogueOutcome.save(
            AwaitingHumanSession(origin=session, requirement=requirement), summary
        )

    # === Contato pai/responsável ===

    def _parent_student_count(self, session: ParentContactSession, text: str) -> DialogueOutcome:
        return self._start_collection(session, text, self._parent_collector)

    def _parent_student_field(self, session: ParentContactSession, text: str) -> DialogueOutcome:
        return self._collect_field(
            session, text, self._parent_collector, on_complete=self._parent_students_done
        )

    def _parent_students_done(self, session: ParentContactSession) -> DialogueOutcome:
        records = session.students.records if session.students else ()
        handoff = AwaitingHumanSession(origin=session)
        logger.info(
            "Team contact requested, bot stopped",
            extra={"contact_type": handoff.contact_type, "student_count": len(records)},
        )
        # Ordem importa: bloco de contato antes do resumo dos alunos.
        return DialogueOutcome.save(
            handoff,
            replies.PARENT_CONTACT_INFO,
            replies.student_details(records),
        )

    # === Coleta compartilhada ===

    def _start_collection(
        self,
        session: InfoRequestSession | ParentContactSession,
        text: str,
        collector: RecordCollector,
    ) -> DialogueOutcome:
        result = collector.start(text)
        if result is None:
            return DialogueOutcome.save(session, collector.invalid_count_reply())
        updated = session.model_copy(
            update={"students": result.students, "step": result.next_step}
        )
        return DialogueOutcome.save(updated, result.reply or "")

    def _collect_field(
        self,
        session: InfoRequestSession | ParentContactSession,
        text: str,
        collector: RecordCollector,
        on_complete: Callable[[Any], DialogueOutcome],
    ) -> DialogueOutcome:
        if session.students is None or session.step not in collector.steps:
            return self._reset(session)

        result = collector.collect(session.students, session.step, text)
        updated = session.model_copy(update={"students": result.students})
        if result.next_step is None:
            return on_complete(updated)

        return DialogueOutcome.save(
            updated.model_copy(update={"step": result.next_step}),
            result.reply or "",
        )
