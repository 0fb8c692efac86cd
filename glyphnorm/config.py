"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    glyphnorm_env: str = "development"
    glyphnorm_log_level: str = "info"

    # Target canvas: viewBox="0 0 size size"
    glyphnorm_size: int = 24

    # Batch thread pool
    glyphnorm_workers: int = 4

    # Decimal places in rewritten path data; None keeps the shortest exact form
    glyphnorm_precision: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
