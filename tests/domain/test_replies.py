"""Testes para os textos enviados ao remetente."""

from __future__ import annotations

from finance_bot.domain import replies
from finance_bot.domain.session import StudentRecord

RECORDS = (
    StudentRecord(name="Ali", year="Y1 British", student_id="1001"),
    StudentRecord(name="Mona", year="G1 American", student_id="1002"),
)


class TestPrompts:
    """Testes para prompts parametrizados."""

    def test_student_name_prompt(self) -> None:
        """Prompt de nome mostra posição e total."""
        assert replies.student_name_prompt(2, 3) == (
            "📝 **Student 2 of 3**\n\n👤 **Student Full Name:**"
        )

    def test_student_year_prompt(self) -> None:
        """Prompt de ano traz exemplos."""
        assert replies.student_year_prompt(1).startswith("📅 **Student 1 Academic Year/Section:**")
        assert "Example: Y1 British, G1 American, etc." in replies.student_year_prompt(1)

    def test_student_id_prompt(self) -> None:
        """Prompt de ID usa a posição 1-based."""
        assert replies.student_id_prompt(3) == "🆔 **Student 3 ID Number:**"

    def test_invalid_count(self) -> None:
        """Aviso de quantidade inválida com os limites."""
        assert replies.invalid_count(1, 10) == "❌ Please enter a valid number between 1 and 10."


class TestSummaries:
    """Testes para os resumos de alunos."""

    def test_request_summary_recorded(self) -> None:
        """Resumo registrado lista alunos na ordem e a necessidade."""
        text = replies.request_summary(RECORDS, "Payment Order", recorded=True)

        assert text.index("**Student 1:**") < text.index("**Student 2:**")
        assert "🆔 **ID:** 1002" in text
        assert "✅ **Your request has been recorded.**" in text
        assert "⏳ **Please wait while we process your request.**" in text
        assert text.endswith(
            f"{replies.TEAM_FOLLOW_UP}\n\n{replies.SERVICE_ENDED}\n\n{replies.SIGNATURE}"
        )

    def test_request_summary_other(self) -> None:
        """Resumo de "Other" não afirma registro."""
        text = replies.request_summary(RECORDS[:1], "Other - Team Contact Needed", recorded=False)

        assert "recorded" not in text
        assert "📋 **Request:** Other - Team Contact Needed" in text

    def test_student_details(self) -> None:
        """Detalhes do pai/responsável terminam com a assinatura."""
        text = replies.student_details(RECORDS)

        assert text.startswith("📋 **Student Details**\n\n**Student 1:**\n👤 **Name:** Ali\n")
        assert text.endswith(replies.SIGNATURE)
