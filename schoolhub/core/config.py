# schoolhub/core/config.py
from __future__ import annotations
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = ROOT_DIR / ".env"

SUPABASE_HOSTS = ("supabase.co", "supabase.com")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_NAME: str = "SchoolHub Insights API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60
    # bcrypt work factor for stored passwords
    PASSWORD_HASH_ROUNDS: int = 12

    # Dashboard origins, comma-separated. Empty allows any origin.
    CORS_ORIGINS: str = ""

    # Roster participation (%) under which insights suggest sending reminders
    LOW_PARTICIPATION_THRESHOLD: float = 80.0

    DATABASE_URL: str | None = None
    SQLALCHEMY_DATABASE_URI: str | None = None

    @property
    def cors_list(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def db_url(self) -> str:
        url = (self.DATABASE_URL or self.SQLALCHEMY_DATABASE_URI or "").strip()
        if not url:
            raise ValueError("No database configured: set DATABASE_URL.")
        if any(host in url for host in SUPABASE_HOSTS) and "sslmode=" not in url:
            sep = "&" if "?" in url else "?"
            url = f"{url}{sep}sslmode=require"
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
