from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
import requests

from railey_listings.config import Settings
from railey_listings.services import ListingSource, NetworkFailure


class FakeSession:
    def __init__(self, status: int = 200, text: str = "", error: Exception | None = None) -> None:
        self.status = status
        self.text = text
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> SimpleNamespace:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error

        def raise_for_status() -> None:
            if self.status >= 400:
                raise requests.HTTPError(f"{self.status} error")

        return SimpleNamespace(text=self.text, raise_for_status=raise_for_status)


def test_fetch_returns_html_with_timeout_and_user_agent() -> None:
    session = FakeSession(text="<html>ok</html>")
    settings = Settings(source_url="https://example.com/listings/", http_timeout_secs=12.5, user_agent="UA/1")
    assert ListingSource(settings, session=session).fetch() == "<html>ok</html>"
    call = session.calls[0]
    assert call["url"] == "https://example.com/listings/"
    assert call["timeout"] == 12.5
    assert call["headers"]["User-Agent"] == "UA/1"


@pytest.mark.parametrize(
    "session",
    [FakeSession(status=503), FakeSession(error=requests.ConnectionError("refused"))],
)
def test_fetch_failures_raise_network_failure(session: FakeSession) -> None:
    with pytest.raises(NetworkFailure):
        ListingSource(Settings(), session=session).fetch()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LISTINGS_EXTRACTOR", " OpenAI ")
    monkeypatch.setenv("LISTINGS_CACHE_TTL_SECS", "60")
    monkeypatch.setenv("EXTRACT_MAX_LISTINGS", "not-a-number")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    settings = Settings.from_env()
    assert settings.extractor == "openai"
    assert settings.cache_ttl_secs == 60
    assert settings.max_listings == 50
    assert settings.openai_api_key is None
