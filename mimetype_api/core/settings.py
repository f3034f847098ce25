from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    MIMETYPE_ENV: str = "development"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(default=3000, validation_alias=AliasChoices("PORT", "API_PORT"))
    LOG_LEVEL: str = "INFO"
    FETCH_TIMEOUT: int = 10_000
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    FETCH_USER_AGENT: str = "MimetypeAPI/1.0"

    @model_validator(mode="after")
    def check_fetch_limits(self) -> "Settings":
        if self.FETCH_TIMEOUT <= 0:
            raise ValueError("FETCH_TIMEOUT must be a positive number of milliseconds")
        if self.MAX_FILE_SIZE <= 0:
            raise ValueError("MAX_FILE_SIZE must be a positive number of bytes")
        if not self.FETCH_USER_AGENT.strip():
            raise ValueError("FETCH_USER_AGENT must not be empty")
        return self

    @property
    def fetch_timeout_seconds(self) -> float:
        return self.FETCH_TIMEOUT / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
