from pydantic_settings import BaseSettings
from typing import List, Any, NamedTuple
import json


INSECURE_JWT_SECRET = "default_secret_change_in_production"
INSECURE_ADMIN_PASSWORD = "admin123"


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Campus CMS"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./campus_cms.db"
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str = INSECURE_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days
    BCRYPT_ROUNDS: int = 12  # 4 for tests (fast), 12 for prod (secure)

    # Environment-configured super admin (no database row)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = INSECURE_ADMIN_PASSWORD
    ADMIN_EMAIL: str = "admin@cms.com"

    # ==========================================
    # CORS
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class ConfigReport(NamedTuple):
    """Outcome of inspecting a settings snapshot at startup"""
    errors: List[str]
    warnings: List[str]

    @property
    def ok(self) -> bool:
        return not self.errors


def inspect_settings(snapshot: Settings) -> ConfigReport:
    """
    Check a settings snapshot for insecure or broken values.

    Pure function: nothing is logged or raised here. Insecure defaults are
    warnings in development and errors in production; the caller decides
    whether to log, abort or ignore.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not snapshot.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not snapshot.JWT_SECRET_KEY:
        errors.append("JWT_SECRET_KEY is not set")

    if not snapshot.ADMIN_USERNAME or not snapshot.ADMIN_PASSWORD:
        errors.append("ADMIN_USERNAME and ADMIN_PASSWORD must both be set")

    insecure = []
    if snapshot.JWT_SECRET_KEY == INSECURE_JWT_SECRET:
        insecure.append("JWT_SECRET_KEY is using the default value")
    if snapshot.ADMIN_PASSWORD == INSECURE_ADMIN_PASSWORD:
        insecure.append("ADMIN_PASSWORD is using the default value")

    if snapshot.is_production:
        errors.extend(insecure)
        if snapshot.DEBUG:
            warnings.append("DEBUG is enabled in production")
    else:
        warnings.extend(insecure)

    if snapshot.ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
        errors.append("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

    return ConfigReport(errors=errors, warnings=warnings)


settings = Settings()
