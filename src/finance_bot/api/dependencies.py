"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from finance_bot.application.dispatcher import InboundDispatcher
from finance_bot.config.settings import Settings
from finance_bot.infra.session_contract import SessionStore


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    """Retorna o store de sessão ativo."""

    return request.app.state.session_store


def get_dispatcher(request: Request) -> InboundDispatcher:
    """Retorna o dispatcher inbound."""

    return request.app.state.dispatcher


def get_started_at(request: Request) -> float:
    """Instante (monotonic) em que a aplicação foi criada."""

    return request.app.state.started_at
