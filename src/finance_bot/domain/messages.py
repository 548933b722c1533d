"""Evento inbound consumido pelo core (independente do transporte)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class InboundMessage(BaseModel):
    """Mensagem recebida já normalizada pelo adapter de transporte.

    sender_id é sempre o número do cliente (chave da sessão), inclusive
    quando a mensagem foi enviada pelo operador a partir do número da escola
    (is_self_originated=True).
    """

    model_config = ConfigDict(frozen=True)

    sender_id: str
    text: str | None = None
    has_image: bool = False
    has_document: bool = False
    is_self_originated: bool = False
    message_id: str | None = None

    @property
    def has_attachment(self) -> bool:
        return self.has_image or self.has_document
