"""Runtime settings, read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    # Relative to the working directory; Database creates the folder.
    database: str = "data/storefront.db"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 8000

    @staticmethod
    def from_env() -> Settings:
        defaults = Settings()
        return Settings(
            database=os.getenv("STOREFRONT_DATABASE", defaults.database),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", defaults.log_level).upper(),
            cors_origins=_split(os.getenv("STOREFRONT_CORS_ORIGINS", "*")),
            host=os.getenv("STOREFRONT_HOST", defaults.host),
            port=int(os.getenv("STOREFRONT_PORT", str(defaults.port))),
        )
