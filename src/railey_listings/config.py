"""Runtime settings read from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_SOURCE_URL = "https://www.railey.com/listings/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_CACHE_TTL = 30 * 60  # 30 minutes


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


@dataclass
class Settings:
    source_url: str = DEFAULT_SOURCE_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout_secs: float = 30.0
    # "pattern" or "openai"
    extractor: str = "pattern"
    openai_api_key: Optional[str] = None
    openai_extract_model: str = "gpt-4o"
    openai_chat_model: str = "gpt-4o-mini"
    max_content_chars: int = 50_000
    max_listings: int = 50
    cache_ttl_secs: int = DEFAULT_CACHE_TTL
    initial_limit: int = 12

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            source_url=os.environ.get("RAILEY_LISTINGS_URL", DEFAULT_SOURCE_URL),
            user_agent=os.environ.get("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
            http_timeout_secs=_env_float("HTTP_TIMEOUT_SECS", 30.0),
            extractor=os.environ.get("LISTINGS_EXTRACTOR", "pattern").strip().lower(),
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            openai_extract_model=os.environ.get("OPENAI_EXTRACT_MODEL", "gpt-4o"),
            openai_chat_model=os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini"),
            max_content_chars=_env_int("EXTRACT_MAX_CHARS", 50_000),
            max_listings=_env_int("EXTRACT_MAX_LISTINGS", 50),
            cache_ttl_secs=_env_int("LISTINGS_CACHE_TTL_SECS", DEFAULT_CACHE_TTL),
            initial_limit=_env_int("STORE_INITIAL_LIMIT", 12),
        )
