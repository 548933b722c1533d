"""Modelos de sessão (união discriminada por fluxo).

Cada fluxo carrega apenas os campos que lhe pertencem:
- MenuSession: menu principal e escolha do tipo de contato
- InfoRequestSession: pedido de informação/documentos
- ParentContactSession: contato com a equipe como pai/responsável
- SupplierSession / ReceiptSubmissionSession: origens de handoff sem coleta
- AwaitingHumanSession: sessão congelada aguardando o operador

Modelos são imutáveis; o engine produz novas instâncias via model_copy.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from finance_bot.domain.session.states import (
    ContactType,
    DialogueStep,
    Requirement,
)


class StudentRecord(BaseModel):
    """Aluno informado pelo remetente (nome, ano/seção, matrícula)."""

    model_config = ConfigDict(frozen=True)

    name: str
    year: str
    student_id: str


class StudentCollection(BaseModel):
    """Coleta limitada de N registros de aluno.

    Invariante: current_index == len(records) e 0 <= current_index <= count.
    O registro em construção fica em pending_name/pending_year até o ID chegar.
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=1)
    records: tuple[StudentRecord, ...] = ()
    pending_name: str | None = None
    pending_year: str | None = None

    @property
    def current_index(self) -> int:
        return len(self.records)

    @property
    def position(self) -> int:
        """Posição 1-based do aluno em coleta."""
        return self.current_index + 1

    @property
    def is_complete(self) -> bool:
        return self.current_index >= self.count

    def with_name(self, name: str) -> StudentCollection:
        return self.model_copy(update={"pending_name": name, "pending_year": None})

    def with_year(self, year: str) -> StudentCollection:
        return self.model_copy(update={"pending_year": year})

    def with_id(self, student_id: str) -> StudentCollection:
        """Fecha o registro corrente e avança o índice em exatamente 1."""
        record = StudentRecord(
            name=self.pending_name or "",
            year=self.pending_year or "",
            student_id=student_id,
        )
        return self.model_copy(
            update={
                "records": (*self.records, record),
                "pending_name": None,
                "pending_year": None,
            }
        )


class _SessionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: DialogueStep


class MenuSession(_SessionBase):
    kind: Literal["menu"] = "menu"
    step: DialogueStep = DialogueStep.INITIAL


class InfoRequestSession(_SessionBase):
    kind: Literal["info_request"] = "info_request"
    step: DialogueStep = DialogueStep.COLLECT_INFO_STUDENT_COUNT
    students: StudentCollection | None = None


class ParentContactSession(_SessionBase):
    kind: Literal["parent_contact"] = "parent_contact"
    step: DialogueStep = DialogueStep.COLLECT_STUDENT_COUNT
    contact_type: Literal[ContactType.PARENT] = ContactType.PARENT
    students: StudentCollection | None = None


class SupplierSession(_SessionBase):
    """Fornecedor: não há coleta, segue direto para o handoff."""

    kind: Literal["supplier_contact"] = "supplier_contact"
    step: DialogueStep = DialogueStep.SELECT_CONTACT_TYPE
    contact_type: Literal[ContactType.SUPPLIER] = ContactType.SUPPLIER


class ReceiptSubmissionSession(_SessionBase):
    """Opção 2 do menu: instruções de envio de comprovante e handoff."""

    kind: Literal["receipt_submission"] = "receipt_submission"
    step: DialogueStep = DialogueStep.SERVICE_SELECTION


HandoffOrigin = Annotated[
    InfoRequestSession | ParentContactSession | SupplierSession | ReceiptSubmissionSession,
    Field(discriminator="kind"),
]


class AwaitingHumanSession(_SessionBase):
    """Sessão congelada até o operador enviar uma palavra de reativação."""

    kind: Literal["awaiting_human"] = "awaiting_human"
    step: DialogueStep = DialogueStep.TEAM_CONTACT_REQUESTED
    origin: HandoffOrigin
    requirement: Requirement | None = None

    @property
    def contact_type(self) -> ContactType | None:
        return getattr(self.origin, "contact_type", None)


Session = Annotated[
    MenuSession | InfoRequestSession | ParentContactSession | AwaitingHumanSession,
    Field(discriminator="kind"),
]
"""Sessões que podem ficar armazenadas no SessionStore."""
