"""Execução local: python -m finance_bot."""

from __future__ import annotations

import uvicorn

from finance_bot.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "finance_bot.api.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
