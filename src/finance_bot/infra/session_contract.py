"""Contrato do SessionStore: uma sessão por remetente, sem expiração.

A chave é o número do cliente (sender_id); len() conta as sessões ativas
reportadas em /health e /status.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from finance_bot.domain.protocols.session_store import SessionStoreProtocol

if TYPE_CHECKING:
    from finance_bot.domain.session import Session


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""

    pass


class SessionStore(SessionStoreProtocol):
    """Contrato abstrato: uma sessão por remetente, sem TTL."""

    @abstractmethod
    def get(self, sender_id: str) -> Session | None:
        """Retorna a sessão do remetente, ou None se não houver."""
        ...

    @abstractmethod
    def set(self, sender_id: str, session: Session) -> None:  # noqa: A003
        """Substitui a sessão do remetente.

        Raises:
            SessionStoreError: Se a sessão não for um tipo armazenável
        """
        ...

    @abstractmethod
    def delete(self, sender_id: str) -> bool:
        """Remove a sessão; retorna True se existia."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Quantidade de sessões ativas."""
        ...
