"""Classificação da mensagem inbound antes da tabela de passos.

Precedência (primeira regra que casa decide):
0. Sem texto extraível (inclui anexo sem legenda) => ignorada.
1. Sessão aguardando humano: só o operador (mensagem do próprio número)
   pode reativar o bot com uma palavra de reativação; o resto é ignorado.
2. Mensagens do próprio número fora do handoff são ignoradas.
3. Anexo (imagem/documento) ou palavra de comprovante => comprovante de
   pagamento, em qualquer passo (o anexo só conta com legenda).
4. Caso contrário, entrada para o passo atual.
"""

from __future__ import annotations

from enum import StrEnum

from finance_bot.domain.messages import InboundMessage
from finance_bot.domain.session import AwaitingHumanSession, Session

RESTART_KEYWORDS: tuple[str, ...] = (
    "تم استلام المبلغ",
    "payment received",
    "begin",
    "new",
    "help",
)
"""Substrings (case-insensitive) que reativam o bot após o handoff."""

AGENT_SIGN_OFF = "happy to assist. don't hesitate to reach out again if needed."
"""Frase de encerramento do atendente; reativa apenas com match exato."""

RECEIPT_KEYWORDS: tuple[str, ...] = (
    "receipt",
    "payment",
    "paid",
    "proof",
    "transaction",
    "transfer",
)


class MessageKind(StrEnum):
    """Destino da mensagem após a classificação."""

    IGNORED = "ignored"
    OPERATOR_RESTART = "operator_restart"
    PAYMENT_PROOF = "payment_proof"
    STEP_INPUT = "step_input"


def is_restart_command(text: str | None) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return lowered == AGENT_SIGN_OFF or any(keyword in lowered for keyword in RESTART_KEYWORDS)


def has_receipt_keyword(text: str | None) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in RECEIPT_KEYWORDS)


def classify(message: InboundMessage, session: Session | None) -> MessageKind:
    """Decide como o engine deve tratar a mensagem (função pura)."""
    if not message.text:
        return MessageKind.IGNORED

    if isinstance(session, AwaitingHumanSession):
        if message.is_self_originated and is_restart_command(message.text):
            return MessageKind.OPERATOR_RESTART
        return MessageKind.IGNORED

    if message.is_self_originated:
        return MessageKind.IGNORED

    if message.has_attachment or has_receipt_keyword(message.text):
        return MessageKind.PAYMENT_PROOF

    return MessageKind.STEP_INPUT
