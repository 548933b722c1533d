"""Textos enviados ao remetente (copy do Finance Department).

Os textos são literais bilíngues (inglês com trechos em árabe) e fazem parte
do contrato externo: alterar aqui altera o que o usuário vê no WhatsApp.
"""

from __future__ import annotations

from collections.abc import Iterable

from finance_bot.domain.session.models import StudentRecord

SIGNATURE = "🏛️ *Imperial College Egypt - Finance Department*"

SERVICE_ENDED = (
    "🤖 *Assistant service ended. It will be restarted after reviewing you request.*"
)

WELCOME = (
    "🏛️ *Welcome to Imperial College Egypt*\n"
    "*Finance Department Assistant*\n\n"
    "📋 **How can we help you today?**\n\n"
    "Please choose:\n\n"
    "*1* - Request information/documents\n"
    "*2* - Submit payment receipt\n"
    "*3* - Our payment plans & Deadlines\n"
    "*4* - Contact finance team\n\n"
    "Type the number of your choice."
)

START_OVER = (
    f"{SIGNATURE}\n\n"
    "Let's start over. How can we help you today?\n\n"
    "*1* - Request information\n"
    "*2* - Submit payment receipt\n"
    "*3* - Payment plans & deadlines\n"
    "*4* - Contact finance team"
)

INVALID_SERVICE_CHOICE = (
    "❌ Invalid choice. Please type:\n"
    "*1* For information request\n"
    "*2* For payment receipt\n"
    "*3* For payment plans & deadlines\n"
    "*4* To contact finance team"
)

INFO_STUDENT_COUNT_PROMPT = (
    "📝 **Information Request**\n\n"
    "How many students do you need information for?\n\n"
    "Please type the number (e.g., 1, 2, 3...)"
)

RECEIPT_INSTRUCTIONS = (
    "📎 **Payment Receipt Submission**\n\n"
    "Please send your payment receipt/proof as:\n"
    "• Photo\n"
    "• Document\n"
    "• Or type details in your message\n\n"
    "We'll confirm receipt shortly.\n\n"
    "⏳ **Please wait for someone from our team to contact you.**\n\n"
    f"{SERVICE_ENDED}"
)

PAYMENT_PLANS = (
    "💰 **Payment Plans & Deadlines**\n\n"
    "📅 **Academic Year Payment Schedule:**\n\n"
    "🔸 **1st Installment 40%** - July\n"
    "Beginning from 01-06-20XX To 15-06-20XX\n\n"
    "🔸 **2nd Installment 30%** - September\n"
    "Beginning from 01-09-20XX To 15-09-20XX\n\n"
    "🔸 **3rd Installment 30%** - December\n"
    "Beginning from 01-12-20XX To 15-12-20XX\n\n"
    "📞 For specific dates and detailed information, please contact our finance team.\n\n"
    f"{SIGNATURE}"
)

CONTACT_TYPE_PROMPT = (
    "💬 **Contact Finance Team**\n\n"
    "Please specify your relation:\n\n"
    "*1* - Parent\n"
    "*2* - Supplier (مورد)\n\n"
    "Type the number of your choice."
)

INVALID_CONTACT_TYPE = "❌ Invalid choice. Please type:\n*1* For Parent\n*2* For Supplier (مورد)"

PARENT_STUDENT_COUNT_PROMPT = (
    "📝 **Parent Request**\n\n"
    "How many students do you have at Imperial College Egypt?\n\n"
    "Please type the number (e.g., 1, 2, 3...)"
)

SUPPLIER_CONTACT_INFO = (
    "💬 **Contact Finance Team**\n\n"
    "🏢 **Office Location:** Finance Department\n"
    "⏰ **Working Hours:** Sunday-Thursday, 9 AM - 2 PM\n"
    "📧 **Email:** finance@imperialcollegeegypt.edu.eg\n"
    "📱 **Phone:** +20 10 5023 9220\n\n"
    "⏳ **Please wait for someone from our team to contact you.**\n\n"
    f"{SERVICE_ENDED}"
)

PARENT_CONTACT_INFO = (
    "💬 **Finance Department**\n\n"
    "⏰ **(Summer)Working Hours:** Sunday-Thursday, 9 AM - 2 PM\n"
    "📧 **Email:** finance@imperialcollegeegypt.edu.eg\n"
    "📱 **Phone:** +20 10 5023 9220"
)

REQUIREMENT_PROMPT = (
    "📋 **What do you need from us?**\n\n"
    "Please choose:\n\n"
    "*1* - Payment Order\n"
    "*2* - Payment Link\n"
    "*3* - Other (Someone from our team will be with you as soons as possible)\n\n"
    "Type the number of your choice."
)

INVALID_REQUIREMENT = (
    "❌ Invalid choice. Please type:\n"
    "*1* For Payment Order\n"
    "*2* For Payment Link\n"
    "*3* For Other(Team Contact)"
)

RECEIPT_ACKNOWLEDGED = (
    f"{SIGNATURE}\n\n"
    "✅ Thank you for your payment submission.\n\n"
    "⏳ **Please wait for confirmation**\n\n"
    "Our finance team will review your payment and get back to you shortly.\n\n"
    "📞 For urgent matters, please contact the finance office directly."
)

REACTIVATED = (
    "🤖 **Assistant Reactivated**\n\n"
    "I'm back online and ready to take your request once again!"
)

TEAM_FOLLOW_UP = "⏳ **Someone from our finance team will get back to you shortly.**"


def invalid_count(minimum: int, maximum: int) -> str:
    return f"❌ Please enter a valid number between {minimum} and {maximum}."


def student_name_prompt(position: int, count: int) -> str:
    return f"📝 **Student {position} of {count}**\n\n👤 **Student Full Name:**"


def student_year_prompt(position: int) -> str:
    return (
        f"📅 **Student {position} Academic Year/Section:**\n\n"
        "Example: Y1 British, G1 American, etc."
    )


def student_id_prompt(position: int) -> str:
    return f"🆔 **Student {position} ID Number:**"


def _student_blocks(records: Iterable[StudentRecord]) -> str:
    return "".join(
        f"**Student {index}:**\n"
        f"👤 **Name:** {record.name}\n"
        f"📅 **Year:** {record.year}\n"
        f"🆔 **ID:** {record.student_id}\n\n"
        for index, record in enumerate(records, start=1)
    )


def request_summary(
    records: Iterable[StudentRecord],
    requirement: str,
    *,
    recorded: bool,
) -> str:
    """Resumo do pedido de informação.

    recorded=True para Payment Order/Link (pedido registrado);
    False para "Other", que só aguarda contato da equipe.
    """
    body = f"📋 **Request Summary**\n\n{_student_blocks(records)}📋 **Request:** {requirement}\n\n"
    if recorded:
        body += (
            "✅ **Your request has been recorded.**\n\n"
            "⏳ **Please wait while we process your request.**\n\n"
        )
    return f"{body}{TEAM_FOLLOW_UP}\n\n{SERVICE_ENDED}\n\n{SIGNATURE}"


def student_details(records: Iterable[StudentRecord]) -> str:
    """Resumo enviado após o bloco de contato no fluxo de pai/responsável."""
    return (
        f"📋 **Student Details**\n\n{_student_blocks(records)}"
        f"{TEAM_FOLLOW_UP}\n\n{SERVICE_ENDED}\n\n{SIGNATURE}"
    )
