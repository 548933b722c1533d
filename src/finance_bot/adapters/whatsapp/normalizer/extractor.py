"""Leitura do payload bruto do webhook (entry -> changes -> value).

Só dois campos carregam conversa: "messages" (cliente -> escola) e
"smb_message_echoes" (operador -> cliente pelo app WhatsApp Business).
Status de entrega e os demais campos não geram mensagens.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from finance_bot.observability.logging import get_logger

logger = get_logger(__name__)

# field do change -> (chave da lista no value, é eco do operador)
_CONVERSATION_FIELDS: dict[str, tuple[str, bool]] = {
    "messages": ("messages", False),
    "smb_message_echoes": ("message_echoes", True),
}

# Tipos de mídia cuja legenda vale como texto da mensagem
CAPTIONED_TYPES = frozenset({"image", "document", "video"})


def _message_text(msg: dict[str, Any], message_type: str) -> str | None:
    block = msg.get(message_type)
    if not isinstance(block, dict):
        return None
    if message_type == "text":
        return block.get("body")
    if message_type in CAPTIONED_TYPES:
        return block.get("caption")
    return None


def _conversation_lists(payload: dict[str, Any]) -> Iterator[tuple[list[Any], bool]]:
    for entry in payload.get("entry") or []:
        for change in entry.get("changes") or []:
            target = _CONVERSATION_FIELDS.get(change.get("field", "messages"))
            value = change.get("value")
            if target is None or not isinstance(value, dict):
                continue
            list_key, is_echo = target
            yield list(value.get(list_key) or []), is_echo


def extract_payload_messages(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Mensagens de conversa na ordem do payload, como dicts planos."""
    extracted: list[dict[str, Any]] = []
    for raw_messages, is_echo in _conversation_lists(payload):
        for msg in raw_messages:
            if not isinstance(msg, dict) or not msg.get("id"):
                logger.debug("webhook_message_without_id", extra={"is_echo": is_echo})
                continue
            message_type = msg.get("type") or "unknown"
            extracted.append(
                {
                    "message_id": msg["id"],
                    "from_number": msg.get("from"),
                    "to_number": msg.get("to"),
                    "message_type": message_type,
                    "text": _message_text(msg, message_type),
                    "is_echo": is_echo,
                }
            )
    return extracted
