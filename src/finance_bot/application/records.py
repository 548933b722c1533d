"""Sub-máquina de coleta de N alunos (nome -> ano -> ID).

Reusada pelo pedido de informação e pelo contato de pai/responsável; cada
fluxo informa o seu trio de passos e decide o que fazer ao concluir.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from finance_bot.domain import replies
from finance_bot.domain.session import DialogueStep, StudentCollection
from finance_bot.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True, slots=True)
class RecordSteps:
    """Trio de passos de um fluxo de coleta."""

    name: DialogueStep
    year: DialogueStep
    student_id: DialogueStep

    def __contains__(self, step: object) -> bool:
        return step in (self.name, self.year, self.student_id)


INFO_RECORD_STEPS = RecordSteps(
    name=DialogueStep.COLLECT_NAME,
    year=DialogueStep.COLLECT_YEAR,
    student_id=DialogueStep.COLLECT_ID,
)

PARENT_RECORD_STEPS = RecordSteps(
    name=DialogueStep.COLLECT_PARENT_STUDENT_NAME,
    year=DialogueStep.COLLECT_PARENT_STUDENT_YEAR,
    student_id=DialogueStep.COLLECT_PARENT_STUDENT_ID,
)


@dataclass(frozen=True, slots=True)
class CollectResult:
    """Resultado de um turno de coleta.

    next_step None indica coleta concluída (sem prompt: quem conclui
    é o fluxo chamador).
    """

    students: StudentCollection
    next_step: DialogueStep | None
    reply: str | None


def parse_count(text: str, minimum: int, maximum: int) -> int | None:
    """Extrai a quantidade de alunos.

    Aceita o inteiro no início do texto ("2", " 3 ", "2 kids");
    retorna None se não houver inteiro ou se estiver fora de [minimum, maximum].
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    value = int(match.group(1))
    if value < minimum or value > maximum:
        return None
    return value


class RecordCollector:
    """Coleta registros {name, year, student_id} para um trio de passos."""

    def __init__(self, steps: RecordSteps, minimum: int = 1, maximum: int = 10) -> None:
        self.steps = steps
        self.minimum = minimum
        self.maximum = maximum

    def start(self, text: str) -> CollectResult | None:
        """Processa a resposta de quantidade; None se inválida."""
        count = parse_count(text, self.minimum, self.maximum)
        if count is None:
            logger.debug("Student count rejected", extra={"step": self.steps.name})
            return None
        students = StudentCollection(count=count)
        return CollectResult(
            students=students,
            next_step=self.steps.name,
            reply=replies.student_name_prompt(students.position, count),
        )

    def invalid_count_reply(self) -> str:
        return replies.invalid_count(self.minimum, self.maximum)

    def collect(
        self,
        students: StudentCollection,
        step: DialogueStep,
        text: str,
    ) -> CollectResult:
        """Grava o campo do passo atual e indica o próximo passo."""
        if step == self.steps.name:
            students = students.with_name(text)
            return CollectResult(
                students=students,
                next_step=self.steps.year,
                reply=replies.student_year_prompt(students.position),
            )

        if step == self.steps.year:
            students = students.with_year(text)
            return CollectResult(
                students=students,
                next_step=self.steps.student_id,
                reply=replies.student_id_prompt(students.position),
            )

        if step != self.steps.student_id:
            raise ValueError(f"Step {step} is not part of {self.steps}")

        students = students.with_id(text)
        if students.is_complete:
            return CollectResult(students=students, next_step=None, reply=None)

        return CollectResult(
            students=students,
            next_step=self.steps.name,
            reply=replies.student_name_prompt(students.position, students.count),
        )
