"""
school/env.py

- Lit les variables d'environnement (.env) pour settings.py.
- pydantic v2 / pydantic-settings v2.
- Par défaut: SQLite local (dev/tests). Pour PostgreSQL: DB_ENGINE=postgresql + DB_*.
"""

from typing import List, Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(BaseSettings):
    # =========================
    # App / runtime
    # =========================
    SECRET_KEY: str = "dev-insecure-change-me"
    DEBUG: bool = True
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1"]

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def _split_hosts(cls, v):
        if isinstance(v, str):
            # "a,b , c" -> ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database
    # =========================
    DB_ENGINE: Literal["sqlite3", "postgresql"] = "sqlite3"
    DB_NAME: str = "db.sqlite3"
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: Optional[int] = None

    # =========================
    # Logging
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def database(self, base_dir) -> dict:
        """Dict DATABASES["default"] pour Django."""
        if self.DB_ENGINE == "sqlite3":
            return {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": str(base_dir / self.DB_NAME),
            }
        return {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": self.DB_NAME,
            "USER": self.DB_USER or "",
            "PASSWORD": self.DB_PASSWORD or "",
            "HOST": self.DB_HOST or "localhost",
            "PORT": self.DB_PORT or 5432,
            "ATOMIC_REQUESTS": False,
        }


env = Env()
