"""Settings do finance_bot, lidas de variáveis de ambiente (ou .env).

Credenciais da Cloud API nunca têm valor padrão: em development, sem
token/número, o envio fica desabilitado; em staging/production o app não sobe.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

GRAPH_API_VERSION: str = "v24.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"

# (atributo, variável de ambiente) exigidos fora de development
_REQUIRED_WHATSAPP_SETTINGS: tuple[tuple[str, str], ...] = (
    ("whatsapp_phone_number_id", "WHATSAPP_PHONE_NUMBER_ID"),
    ("whatsapp_access_token", "WHATSAPP_ACCESS_TOKEN"),
    ("whatsapp_verify_token", "WHATSAPP_VERIFY_TOKEN"),
    ("whatsapp_webhook_secret", "WHATSAPP_WEBHOOK_SECRET"),
)

_STRICT_ENVIRONMENTS = frozenset({"staging", "stage", "production", "prod"})

SESSION_STORE_BACKENDS = frozenset({"memory"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "finance_bot"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000
    correlation_id_header: str = "X-Correlation-ID"

    # Cloud API: app secret assina os webhooks; access token autoriza os envios
    whatsapp_verify_token: str | None = None
    whatsapp_webhook_secret: str | None = None
    whatsapp_access_token: str | None = None
    whatsapp_phone_number_id: str | None = None
    whatsapp_api_version: str = GRAPH_API_VERSION
    whatsapp_api_base_url: str = GRAPH_API_BASE_URL
    whatsapp_request_timeout_seconds: float = 30.0

    session_store_backend: str = "memory"

    # Faixa aceita na pergunta "quantos alunos?"
    student_count_min: int = 1
    student_count_max: int = 10

    @property
    def requires_whatsapp_credentials(self) -> bool:
        return self.environment.lower() in _STRICT_ENVIRONMENTS

    def get_messages_endpoint(self) -> str:
        """URL de envio: {base}/{versão}/{phone_number_id}/messages."""
        if not self.whatsapp_phone_number_id:
            raise ValueError("WHATSAPP_PHONE_NUMBER_ID é obrigatório para enviar mensagens")
        return (
            f"{self.whatsapp_api_base_url.rstrip('/')}/{self.whatsapp_api_version}"
            f"/{self.whatsapp_phone_number_id}/messages"
        )

    def validate_whatsapp_config(self) -> list[str]:
        """Credenciais ausentes, uma mensagem por variável."""
        return [
            f"{env_name} não configurado"
            for attr, env_name in _REQUIRED_WHATSAPP_SETTINGS
            if not getattr(self, attr)
        ]

    def validate_session_store_config(self) -> list[str]:
        if self.session_store_backend.lower() in SESSION_STORE_BACKENDS:
            return []
        return [f"SESSION_STORE_BACKEND inválido: {self.session_store_backend}"]

    def validate_dialogue_config(self) -> list[str]:
        errors: list[str] = []
        if self.student_count_min < 1:
            errors.append("STUDENT_COUNT_MIN deve ser >= 1")
        if self.student_count_max < self.student_count_min:
            errors.append("STUDENT_COUNT_MAX deve ser >= STUDENT_COUNT_MIN")
        return errors

    def collect_validation_errors(self) -> list[str]:
        """Todos os erros que impedem o app de subir neste ambiente."""
        errors = self.validate_dialogue_config() + self.validate_session_store_config()
        if self.requires_whatsapp_credentials:
            errors += self.validate_whatsapp_config()
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
