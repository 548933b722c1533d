from __future__ import annotations

from typing import Any

from finance_bot.adapters.whatsapp.models import NormalizedWhatsAppMessage
from finance_bot.domain.messages import InboundMessage
from finance_bot.observability.logging import get_logger

from .extractor import extract_payload_messages

logger = get_logger(__name__)


def normalize_messages(payload: dict[str, Any]) -> list[NormalizedWhatsAppMessage]:
    """Mensagens do webhook como modelos do adapter (ainda com from/to)."""
    return [
        NormalizedWhatsAppMessage.model_validate(raw)
        for raw in extract_payload_messages(payload)
    ]


def extract_inbound_messages(payload: dict[str, Any]) -> list[InboundMessage]:
    """Converte o payload do webhook em eventos do core, na ordem recebida."""
    inbound: list[InboundMessage] = []
    for normalized in normalize_messages(payload):
        message = normalized.to_inbound()
        if message is None:
            logger.info(
                "inbound_without_customer_number",
                extra={"message_type": normalized.message_type, "is_echo": normalized.is_echo},
            )
            continue
        inbound.append(message)
    return inbound
