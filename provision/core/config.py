"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# bcrypt only looks at the first 72 bytes of a secret.
BCRYPT_MAX_PASSWORD_BYTES = 72


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    # Routes are served at /user, /user/auth, /health unless a prefix is set
    API_PREFIX: str = ""

    # User store: "elastic" talks to Elasticsearch, "memory" keeps documents in-process
    STORE_BACKEND: Literal["elastic", "memory"] = "elastic"
    ELASTIC_URL: str = "http://localhost:9200"
    ELASTIC_USERNAME: str | None = None
    ELASTIC_PASSWORD: SecretStr | None = None
    IDX_PREFIX: str = ""
    ELASTIC_REQUEST_TIMEOUT_SEC: float = 10.0

    # Credential policy
    PASSWORD_MIN_LEN: int = 10
    BCRYPT_ROUNDS: int = 12

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must be empty or start with '/' (e.g. /api/v1)")
        return v

    @field_validator("ELASTIC_URL")
    @classmethod
    def validate_elastic_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("ELASTIC_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "ELASTIC_URL must use http or https (e.g. http://localhost:9200)"
            )
        return v.strip().rstrip("/")

    @field_validator("IDX_PREFIX")
    @classmethod
    def validate_idx_prefix(cls, v: str) -> str:
        v = v.strip()
        if v != v.lower() or "/" in v:
            raise ValueError("IDX_PREFIX must be lowercase and must not contain '/'")
        return v

    @field_validator("ELASTIC_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_elastic_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "ELASTIC_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v

    @field_validator("PASSWORD_MIN_LEN")
    @classmethod
    def validate_password_min_len(cls, v: int) -> int:
        if v < 1 or v > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"PASSWORD_MIN_LEN must be between 1 and {BCRYPT_MAX_PASSWORD_BYTES}"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
