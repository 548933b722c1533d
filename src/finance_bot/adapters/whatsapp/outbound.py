"""Envio de respostas de texto via Graph API (MessageSender)."""

from __future__ import annotations

import logging

from finance_bot.adapters.whatsapp.http_client import WhatsAppHttpClient
from finance_bot.adapters.whatsapp.models import OutboundTextRequest
from finance_bot.domain.protocols.messaging import MessageSender
from finance_bot.observability.logging import get_logger, mask_sender

logger: logging.Logger = get_logger(__name__)


class WhatsAppTextSender(MessageSender):
    """MessageSender que publica cada texto em /{phone_number_id}/messages.

    send_text só retorna após a resposta da API, então chamadas
    sequenciais chegam ao cliente na mesma ordem.
    """

    def __init__(self, http_client: WhatsAppHttpClient) -> None:
        self._http_client = http_client

    async def send_text(self, to: str, text: str) -> None:
        request = OutboundTextRequest(to=to, text=text)
        message_id = await self._http_client.send_message(request.to_payload())
        # Nunca registrar "to" completo (telefone) nem o texto em logs
        logger.info(
            "message_sent_to_whatsapp_api",
            extra={"message_id": message_id, "to": mask_sender(to)},
        )

    async def close(self) -> None:
        await self._http_client.close()


class DisabledSender(MessageSender):
    """Sender usado em development sem credenciais: apenas registra o envio."""

    async def send_text(self, to: str, text: str) -> None:
        logger.warning(
            "whatsapp_send_disabled",
            extra={"to": mask_sender(to), "length": len(text)},
        )
