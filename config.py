# src/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application configuration settings."""
    DATABASE_URL: Optional[str] = os.environ.get("DATABASE_URL")
    SECRET_KEY: Optional[str] = os.environ.get("JWT_SECRET")
    ALGORITHM: str = os.environ.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

    PORT: int = int(os.environ.get("PORT", 8000))
    CORS_ORIGINS: List[str] = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Schema is managed by alembic; create_all is for local sqlite runs
    AUTO_CREATE_SCHEMA: bool = _env_bool("AUTO_CREATE_SCHEMA", False)

    # Subscription settings
    ENABLE_SCHEDULER: bool = _env_bool("ENABLE_SCHEDULER", True)
    SUBSCRIPTION_SWEEP_MINUTES: int = int(os.environ.get("SUBSCRIPTION_SWEEP_MINUTES", 60))

    def missing(self) -> List[str]:
        """Names of required settings that are not configured."""
        missing = []
        if not self.DATABASE_URL:
            missing.append("DATABASE_URL")
        if not self.SECRET_KEY:
            missing.append("JWT_SECRET")
        return missing


settings = Settings()
