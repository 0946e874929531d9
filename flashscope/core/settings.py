from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(str, Enum):
    DEV = "dev"
    HML = "hml"
    PROD = "prod"


class Settings(BaseSettings):
    APP_ENV: Env = Env.DEV
    DEBUG: bool = False

    # Use uma chave forte em produção
    SESSION_SECRET: str = "dev-change-me"
    SESSION_COOKIE: str = "flashscope_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # 7 dias
    SECURE_COOKIES: bool = False

    # Session slot holding the flash entries between requests
    FLASH_SESSION_KEY: str = "flash"

    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# cria instância global
settings = Settings()
