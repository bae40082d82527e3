"""Application configuration via environment variables."""
import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./events.db"
    CORS_ORIGINS: str = "*"
    DEFAULT_TIMEZONE: str = "UTC"
    EVENTS_COLLECTION: str = "events"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @field_validator("DEFAULT_TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {value}") from None
        return value

    class Config:
        env_file = ".env"


settings = Settings()
