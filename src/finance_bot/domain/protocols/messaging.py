"""Protocolo de envio de mensagens consumido pelo dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MessageSender(ABC):
    """Canal de saída de texto.

    Contrato: send_text só retorna após o envio concluir; chamadas
    sequenciais preservam a ordem de entrega.
    """

    @abstractmethod
    async def send_text(self, to: str, text: str) -> None: ...
