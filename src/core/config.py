"""Application settings, generator configuration, and CORS configuration."""

import json
import os
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env"), env_file_encoding="utf-8")

    # App
    APP_NAME: str = "Mornight Copy Console"
    ENVIRONMENT: str = "development"  # development | production | test

    # CORS
    # Accept list or CSV/JSON string from env; normalized to list[str] by validators
    CORS_ORIGINS: list[str] | str = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    ALLOW_CREDENTIALS: bool = True

    # Generator (OpenAI-compatible chat-completions endpoint)
    # GEMINI_API_KEY is optional at import time; generation refuses to run without it
    GEMINI_API_KEY: str | None = None
    GENERATOR_API_URL: str = "https://api.aihubmix.com/v1/chat/completions"
    GENERATOR_MODEL: str = "gemini-2.5-pro"
    GENERATOR_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0)
    GENERATOR_TEMPERATURE: float = Field(default=0.8, ge=0.0, le=2.0)
    GENERATOR_MAX_TOKENS: int = Field(default=3000, ge=1)
    GENERATOR_TOP_P: float = Field(default=0.9, gt=0.0, le=1.0)
    GENERATOR_FREQUENCY_PENALTY: float = Field(default=0.3, ge=-2.0, le=2.0)
    GENERATOR_PRESENCE_PENALTY: float = Field(default=0.3, ge=-2.0, le=2.0)

    # Retry policy for kinds that retry instead of falling back
    RETRY_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    RETRY_DELAY_SECONDS: float = Field(default=1.0, ge=0.0)

    # Generation history (newest first, trimmed to this many entries)
    HISTORY_LIMIT: int = Field(default=50, ge=1)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: object) -> list[str]:
        """Allow list, CSV string, or JSON array string for CORS origins."""
        if isinstance(v, list):
            return [str(i).strip() for i in v]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError as e:
                    raise ValueError(
                        "CORS_ORIGINS must be a CSV list or JSON array string"
                    ) from e
                if not isinstance(parsed, list):
                    raise ValueError("CORS_ORIGINS JSON must be a list")
                return [str(i).strip() for i in parsed]
            # CSV fallback
            return [i.strip() for i in s.split(",") if i.strip()]
        raise ValueError("Invalid CORS_ORIGINS type; expected str or list[str]")

    @model_validator(mode="after")
    def _validate_cors_credentials(self) -> "Settings":
        """Ensure wildcard origins are not used when credentials are allowed."""
        if isinstance(self.CORS_ORIGINS, str):
            self.CORS_ORIGINS = self.assemble_cors_origins(self.CORS_ORIGINS)
        if self.ALLOW_CREDENTIALS and any(
            o.strip() == "*" for o in (self.CORS_ORIGINS or [])
        ):
            raise ValueError(
                "CORS configuration error: ALLOW_CREDENTIALS=True but "
                "CORS_ORIGINS contains '*'. Use explicit origins when credentials "
                "are allowed."
            )
        return self

    @property
    def generator_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY and self.GEMINI_API_KEY.strip())


@lru_cache
def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env not in {"development", "production", "test"}:
        raise ValueError("ENVIRONMENT must be 'development', 'production', or 'test'")

    if env == "production":
        env_file = ".env.prod"
    elif env == "development":
        env_file = ".env.dev"
    else:
        # test environment - no env file needed, use defaults
        env_file = ""

    # In production the generator key must be provided; everywhere else a
    # missing key only disables the /generate endpoint.
    if env == "production" and not os.getenv("GEMINI_API_KEY"):
        if not env_file or not os.path.exists(env_file):
            raise RuntimeError("GEMINI_API_KEY must be set in production")

    # pydantic-settings accepts the runtime-only `_env_file` kwarg; mypy's
    # stub doesn't, hence the scoped ignore.
    return Settings(_env_file=env_file or None)  # type: ignore[call-arg]
