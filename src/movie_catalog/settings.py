from typing import Literal, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # ---- app/runtime ----
    env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- request handling ----
    max_body_bytes: int = 1_048_576  # 1 MiB cap on request bodies

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = 4000
    api_reload: bool = False  # Auto-reload on code changes (dev only)
    api_workers: int = 1  # Number of uvicorn workers (increase for prod)
    cors_origins: List[str] = ["*"]  # Allowed CORS origins (restrict in prod)

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )


def get_settings() -> Settings:
    """Build settings from the environment and .env file."""
    return Settings()
