"""Configurações centralizadas do finance_bot.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- Constantes da Graph API Meta (GRAPH_API_VERSION, GRAPH_API_BASE_URL)

Uso típico:
    from finance_bot.config import get_settings
"""

from finance_bot.config.settings import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "GRAPH_API_VERSION",
    "GRAPH_API_BASE_URL",
]
