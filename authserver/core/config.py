# authserver/core/config.py

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv


load_dotenv()


DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration for the auth server.
    Values come from the environment (or a .env file) via get_settings().
    """
    jwt_secret_key: str
    database_url: str = DEFAULT_DATABASE_URL
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: Optional[int] = None
    bcrypt_rounds: int = 12
    log_level: str = "INFO"
    log_json: bool = False
    port: int = 5050


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    minutes = int(value)
    return minutes or None


def load_settings() -> Settings:
    secret_key = os.getenv("JWT_SECRET_KEY")
    if not secret_key:
        raise RuntimeError("JWT_SECRET_KEY is not set")

    return Settings(
        jwt_secret_key=secret_key,
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=_env_optional_int("ACCESS_TOKEN_EXPIRE_MINUTES"),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=_env_bool("LOG_JSON"),
        port=int(os.getenv("PORT", "5050")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
