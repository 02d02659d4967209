"""
FitQuest - Configuration
Server settings + provider credentials + client defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings

GenerationStrategyName = Literal["tool_call", "json_prompt"]


class Settings(BaseSettings):
    # ==========================================
    # SERVER
    # ==========================================
    env: str = "dev"  # dev | prod
    service_name: str = "ai-quest-generator-backend"
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # ==========================================
    # PROVIDER (OpenAI)
    # ==========================================
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 1024
    generation_strategy: GenerationStrategyName = "tool_call"

    # ==========================================
    # CLIENT
    # ==========================================
    api_base_url: str = "http://localhost:3001/api"
    client_timeout_seconds: float = 60.0

    class Config:
        env_file = ".env"


# Global settings instance
settings = Settings()
