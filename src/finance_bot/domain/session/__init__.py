"""Sessão de diálogo: passos, tipos e modelos.

Exporta:
- DialogueStep: 13 passos canônicos
- ContactType / Requirement: escolhas registradas no fluxo
- Modelos de sessão (união discriminada por `kind`)
"""

from finance_bot.domain.session.models import (
    AwaitingHumanSession,
    HandoffOrigin,
    InfoRequestSession,
    MenuSession,
    ParentContactSession,
    ReceiptSubmissionSession,
    Session,
    StudentCollection,
    StudentRecord,
    SupplierSession,
)
from finance_bot.domain.session.states import (
    HANDOFF_STEPS,
    INFO_REQUEST_STEPS,
    MENU_STEPS,
    PARENT_CONTACT_STEPS,
    ContactType,
    DialogueStep,
    Requirement,
)

__all__ = [
    "AwaitingHumanSession",
    "ContactType",
    "DialogueStep",
    "HANDOFF_STEPS",
    "HandoffOrigin",
    "INFO_REQUEST_STEPS",
    "InfoRequestSession",
    "MENU_STEPS",
    "MenuSession",
    "PARENT_CONTACT_STEPS",
    "ParentContactSession",
    "ReceiptSubmissionSession",
    "Requirement",
    "Session",
    "StudentCollection",
    "StudentRecord",
    "SupplierSession",
]
