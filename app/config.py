import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv(override=True)

SESSION_COOKIE_NAME = "sessionToken"


def _env_bool(name: str, default: bool = False) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw_value = os.getenv(name, default)
    return tuple(item.strip() for item in raw_value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "")
    session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "7"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    cookie_secure: bool = _env_bool("COOKIE_SECURE", False)
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _env_list(
            "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
        )
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    seed_admin_email: str = os.getenv("SEED_ADMIN_EMAIL", "").strip().lower()
    seed_admin_password: str = os.getenv("SEED_ADMIN_PASSWORD", "")
    seed_admin_name: str = os.getenv("SEED_ADMIN_NAME", "Admin User").strip()

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_ttl_days * 86400


settings = Settings()
