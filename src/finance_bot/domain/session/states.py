"""Passos canônicos do diálogo de atendimento financeiro.

- Cada sessão carrega exatamente um passo (step) deste conjunto fechado
- Os valores são os nomes históricos dos passos (estáveis em logs)
- Passo fora do conjunto esperado para a sessão => reset defensivo
"""

from __future__ import annotations

from enum import StrEnum


class DialogueStep(StrEnum):
    """13 passos do fluxo de atendimento."""

    # === Menu ===
    INITIAL = "initial"
    """Primeira mensagem do remetente; menu ainda não enviado."""

    SERVICE_SELECTION = "service_selection"
    """Menu principal enviado, aguardando opção 1..4."""

    SELECT_CONTACT_TYPE = "select_contact_type"
    """Aguardando relação com a escola (pai/responsável ou fornecedor)."""

    # === Pedido de informação/documentos ===
    COLLECT_INFO_STUDENT_COUNT = "collect_info_student_count"
    COLLECT_NAME = "collect_name"
    COLLECT_YEAR = "collect_year"
    COLLECT_ID = "collect_id"
    COLLECT_REQUIREMENT = "collect_requirement"

    # === Contato com a equipe (pai/responsável) ===
    COLLECT_STUDENT_COUNT = "collect_student_count"
    COLLECT_PARENT_STUDENT_NAME = "collect_parent_student_name"
    COLLECT_PARENT_STUDENT_YEAR = "collect_parent_student_year"
    COLLECT_PARENT_STUDENT_ID = "collect_parent_student_id"

    # === Handoff ===
    TEAM_CONTACT_REQUESTED = "team_contact_requested"
    """Aguardando atendimento humano; o bot só reage ao operador."""


class ContactType(StrEnum):
    """Relação declarada pelo remetente no fluxo de contato."""

    PARENT = "Parent"
    SUPPLIER = "Supplier"


class Requirement(StrEnum):
    """Necessidade registrada ao final do pedido de informação."""

    PAYMENT_ORDER = "Payment Order"
    PAYMENT_LINK = "Payment Link"
    OTHER = "Other - Team Contact Needed"


MENU_STEPS = frozenset({
    DialogueStep.INITIAL,
    DialogueStep.SERVICE_SELECTION,
    DialogueStep.SELECT_CONTACT_TYPE,
})

INFO_REQUEST_STEPS = frozenset({
    DialogueStep.COLLECT_INFO_STUDENT_COUNT,
    DialogueStep.COLLECT_NAME,
    DialogueStep.COLLECT_YEAR,
    DialogueStep.COLLECT_ID,
    DialogueStep.COLLECT_REQUIREMENT,
})

PARENT_CONTACT_STEPS = frozenset({
    DialogueStep.COLLECT_STUDENT_COUNT,
    DialogueStep.COLLECT_PARENT_STUDENT_NAME,
    DialogueStep.COLLECT_PARENT_STUDENT_YEAR,
    DialogueStep.COLLECT_PARENT_STUDENT_ID,
})

HANDOFF_STEPS = frozenset({DialogueStep.TEAM_CONTACT_REQUESTED})
"""Passos em que o bot aguarda o operador humano."""
