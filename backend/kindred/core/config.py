from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Any
from pathlib import Path


def parse_language_list(v: Any) -> List[str]:
    """Parse a comma-separated list of language codes"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        return [code.strip().lower() for code in v.split(',') if code.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Kindred"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_VERSION: str = "v1"

    # Absolute base for links sent by email
    SITE_URL: str = "http://localhost:8000"

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    BCRYPT_ROUNDS: int = 12  # 4 for tests, 12 for prod
    MIN_PASSWORD_LENGTH: int = 8

    # Password reset links
    PASSWORD_TOKEN_LENGTH: int = 40
    PASSWORD_TOKEN_LIFETIME_MINUTES: int = 60

    # Session cookie carrying flash messages
    SESSION_COOKIE: str = "kindred_session"

    # ==========================================
    # Email
    # ==========================================
    SMTP_HOST: str = ""  # blank disables outgoing mail
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_START_TLS: bool = True
    EMAIL_FROM: str = "no-reply@kindred.local"
    EMAIL_FROM_NAME: str = "Kindred"

    # ==========================================
    # Internationalization
    # ==========================================
    DEFAULT_LANGUAGE: str = "en"
    LOCALE_DIR: str = "locale"
    AVAILABLE_LANGUAGES_STR: str = "en,de,fr,nl,he,ar"

    @property
    def AVAILABLE_LANGUAGES(self) -> List[str]:
        return parse_language_list(self.AVAILABLE_LANGUAGES_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_PASSWORD_REQUEST: str = "5/minute"
    RATE_LIMIT_LOGIN: str = "10/minute"

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    @field_validator("DEFAULT_LANGUAGE")
    @classmethod
    def normalise_language(cls, v: str) -> str:
        return v.strip().lower().replace("_", "-") or "en"

    @property
    def locale_path(self) -> Path:
        """Directory holding <lang>/LC_MESSAGES/kindred.mo catalogues"""
        path = Path(self.LOCALE_DIR)
        if not path.is_absolute():
            path = Path(__file__).resolve().parent.parent / path
        return path

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Create settings instance
settings = Settings()
