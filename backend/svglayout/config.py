"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    svglayout_env: str = "development"
    svglayout_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Validation defaults for the HTTP surface
    strict_validation: bool = True
    sanitize_output: bool = True
    round_precision: int = 2

    # Rendering
    default_aspect_ratio: str = "1:1"
    optimize_output: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
