"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./menux.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"
    SESSION_TTL_SECONDS: int = 3600
    # Comma-separated emails granted admin when they sign up (first-admin bootstrap)
    BOOTSTRAP_ADMIN_EMAILS: str = ""

    class Config:
        env_file = ".env"

    @property
    def bootstrap_admin_emails(self) -> set[str]:
        return {e.strip().lower() for e in self.BOOTSTRAP_ADMIN_EMAILS.split(",") if e.strip()}


settings = Settings()
