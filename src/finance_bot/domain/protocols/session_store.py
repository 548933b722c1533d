"""Protocolo de domínio para armazenamento de sessões de diálogo."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from finance_bot.domain.session import Session


class SessionStoreProtocol(ABC):
    """Contrato mínimo: mapa remetente -> sessão, sem expiração."""

    @abstractmethod
    def get(self, sender_id: str) -> Session | None: ...

    @abstractmethod
    def set(self, sender_id: str, session: Session) -> None: ...  # noqa: A003

    @abstractmethod
    def delete(self, sender_id: str) -> bool: ...

    @abstractmethod
    def __len__(self) -> int: ...
