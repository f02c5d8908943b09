from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Document Intelligence"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # console | json

    # LLM providers (an empty key means the provider is not configured)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    google_ai_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Hybrid analysis
    analysis_cooldown_minutes: int = 15  # provider suppression after a quota error
    analysis_provider_timeout_s: float = 45.0  # deadline per provider call
    analysis_large_file_mb: int = 50  # files above this are flagged as a security risk

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def analysis_cooldown_seconds(self) -> float:
        return self.analysis_cooldown_minutes * 60.0

    @property
    def analysis_large_file_bytes(self) -> int:
        return self.analysis_large_file_mb * 1024 * 1024

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
