"""Modelos do adapter WhatsApp Cloud API."""

from __future__ import annotations

from pydantic import BaseModel

from finance_bot.domain.messages import InboundMessage


class NormalizedWhatsAppMessage(BaseModel):
    """Mensagem do webhook normalizada, ainda com detalhes do transporte.

    message_type reflete o tipo técnico da Meta (text, image, document, ...).
    Ecos (smb_message_echoes) são mensagens enviadas pelo próprio número
    da escola; nelas o cliente está em to_number.
    """

    message_id: str
    from_number: str | None = None
    to_number: str | None = None
    message_type: str
    text: str | None = None
    is_echo: bool = False

    @property
    def customer_number(self) -> str | None:
        """Número do cliente, chave da sessão."""
        return self.to_number if self.is_echo else self.from_number

    def to_inbound(self) -> InboundMessage | None:
        """Converte para o evento do core; None se não há cliente identificável."""
        customer = self.customer_number
        if not customer:
            return None
        return InboundMessage(
            sender_id=customer,
            text=self.text,
            has_image=self.message_type == "image",
            has_document=self.message_type == "document",
            is_self_originated=self.is_echo,
            message_id=self.message_id,
        )


class OutboundTextRequest(BaseModel):
    """Envio de texto simples pela Graph API."""

    to: str
    text: str
    preview_url: bool = False

    def to_payload(self) -> dict[str, object]:
        """Payload de /{phone_number_id}/messages."""
        return {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": self.to,
            "type": "text",
            "text": {"preview_url": self.preview_url, "body": self.text},
        }
