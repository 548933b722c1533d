"""Infraestrutura: sessões em memória e transporte HTTP.

Uso típico:
    from finance_bot.infra import create_session_store

Infraestrutura não decide regra de negócio; domínio não conhece infraestrutura.
"""

from finance_bot.infra.http import HttpClient, HttpError, is_transient_status
from finance_bot.infra.session_contract import SessionStore, SessionStoreError
from finance_bot.infra.session_store import create_session_store
from finance_bot.infra.session_store_memory import InMemorySessionStore

__all__ = [
    # Session
    "SessionStore",
    "SessionStoreError",
    "InMemorySessionStore",
    "create_session_store",
    # HTTP
    "HttpClient",
    "HttpError",
    "is_transient_status",
]
