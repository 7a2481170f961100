"""Pytest fixtures and fakes shared across the suite."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, List

import pytest

from railey_listings.models import Property, RawListing
from railey_listings.repositories import MemoryStore
from railey_listings.services import Extractor, ListingCache, NetworkFailure


def listing_card(
    mls: int | str,
    street: str = "12 Lake Rd",
    price: str = "325,000",
    beds: int = 3,
    baths: str = "2.5",
    sqft: str = "2,100",
    with_image: bool = True,
) -> str:
    card = (
        f'<div class="listing">MLS#: {mls} <a href="/listings/{mls}">View</a> '
        f'<span class="price">${price}</span><span class="address">{street}, McHenry, MD 21541</span> '
        f"<span>{beds} Bed</span> <span>{baths} Bath</span> <span>{sqft} SqFt</span>"
    )
    if with_image:
        card += f'<img src="https://cdn.example.com/{mls}.jpg" alt="Photo of MLS {mls}">'
    return card + "</div>"


def listings_page(*cards: str) -> str:
    return "<html><body>\n" + "\n".join(cards) + "\n</body></html>"


class FakeSource:
    def __init__(self, html: str = "<html></html>", error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.calls = 0

    def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.html


class FakeExtractor(Extractor):
    """Returns queued results in order; the last one repeats."""

    name = "fake"

    def __init__(self, *results: Any) -> None:
        self.results = list(results)
        self.calls = 0

    def extract(self, content: str) -> List[RawListing]:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return list(result)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeCompletions:
    def __init__(self, content: Any = None, error: Exception | None = None) -> None:
        self.content = content if isinstance(content, str) or content is None else json.dumps(content)
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(content: Any = None, error: Exception | None = None) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content, error)))


def raw(address: str = "12 Lake Rd, McHenry, MD", price: int = 300_000, **kw: Any) -> RawListing:
    data = {"address": address, "price": price, "bedrooms": 3, "bathrooms": "2"}
    data.update(kw)
    return RawListing(**data)


def make_property(pid: str, title: str, price: int, **kw: Any) -> Property:
    data = {
        "id": pid,
        "title": title,
        "address": kw.pop("address", "1 Main St, Oakland, MD"),
        "price": price,
        "bedrooms": 3,
        "bathrooms": "2",
        "image_url": "https://cdn.example.com/x.jpg",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(kw)
    return Property(**data)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def failing_store(clock: FakeClock) -> MemoryStore:
    """Store whose extractor always raises."""
    cache = ListingCache(FakeSource(), FakeExtractor(NetworkFailure("down")), clock=clock)
    return MemoryStore(cache)
