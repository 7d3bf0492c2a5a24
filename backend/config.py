from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    port: int = field(default_factory=lambda: _env_int("PORT", 30002))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GEMINI_API_KEY") or None)
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-pro"))
    upload_dir: str = field(default_factory=lambda: os.getenv("UPLOAD_DIR", "./uploads"))
    max_upload_bytes: int = field(default_factory=lambda: _env_int("MAX_UPLOAD_BYTES", 20 * 1024 * 1024))
    max_json_bytes: int = field(default_factory=lambda: _env_int("MAX_JSON_BYTES", 5 * 1024 * 1024))
    max_reference_chars: int = field(default_factory=lambda: _env_int("MAX_REFERENCE_CHARS", 100_000))
    cors_origins: List[str] = field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    tutor_max_turns: int = field(default_factory=lambda: _env_int("TUTOR_MAX_TURNS", 40))
    tutor_ttl_seconds: int = field(default_factory=lambda: _env_int("TUTOR_TTL_SECONDS", 3600))
    tutor_max_sessions: int = field(default_factory=lambda: _env_int("TUTOR_MAX_SESSIONS", 1000))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
