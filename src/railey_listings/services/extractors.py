"""Listing extraction strategies.

Both strategies turn the raw HTML of the listings page into ``RawListing``
records and fail only by raising a ``ScrapeError`` or returning an empty list.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, List, Optional

import openai
from openai import OpenAI
from pydantic import ValidationError
from scrapy import Selector

from railey_listings.config import Settings
from railey_listings.models import RawListing
from railey_listings.utils.log import get_logger

from .enrich import (
    extract_features,
    generate_description,
    generate_title,
    merge_features,
    placeholder_image,
)
from .errors import DownstreamServiceError, ExtractionMalformed, NetworkFailure
from .normalize import coerce_int

log = get_logger(__name__)

# One listing card: MLS number, detail link, price, address text node, then beds/baths/sqft.
LISTING_PATTERN = re.compile(
    r'MLS#:\s*(?P<mls>\d+)'
    r'.*?href="(?P<url>[^"]*)"'
    r'.*?\$(?P<price>[\d,]+)'
    r'.*?>\s*(?P<address>[^<>]*?\w[^<>]*?)\s*<'
    r'.*?(?P<beds>\d+)\s+Bed'
    r'.*?(?P<baths>\d+(?:\.\d+)?)\s+Bath'
    r'.*?(?P<sqft>\d[\d,]*)\s+SqFt',
    re.IGNORECASE,
)

SYSTEM_PROMPT = (
    "You are a precise web scraper. Only extract real data that exists in the provided HTML. "
    "Never invent or make up property information."
)

EXTRACT_PROMPT = """Extract property listings from this Railey.com HTML. Look for:
- Property addresses (Deep Creek Lake, Garrett County, MD area)
- Prices (in dollars)
- Bedrooms and bathrooms
- Square footage if available
- Property descriptions
- MLS numbers if available
- Any features (lakefront, ski access, etc.)

Important: Only extract REAL property data that exists in the HTML. Do not make up or invent any data.

Return the data in this exact JSON format:
{{
  "properties": [
    {{
      "address": "actual street address from HTML",
      "price": actual_price_number,
      "bedrooms": actual_bedroom_count,
      "bathrooms": "actual_bathroom_count_as_string",
      "sqft": actual_sqft_or_null,
      "description": "actual description text",
      "features": ["actual", "features", "list"],
      "mlsNumber": "actual_mls_or_null",
      "listingUrl": "actual_listing_url_or_null"
    }}
  ]
}}

If no real property data is found in the HTML, return: {{"properties": []}}

HTML content:
{html}"""


class Extractor:
    name = "base"

    def extract(self, content: str) -> List[RawListing]:
        raise NotImplementedError


class PatternExtractor(Extractor):
    """Regex-driven extractor for the listing cards of the brokerage site.

    - Emits at most ``max_listings`` records, in page order.
    - Picks the image whose ``alt`` text mentions the MLS number, otherwise a
      category placeholder derived from the feature tags.
    """

    name = "pattern"

    def __init__(self, max_listings: int = 50) -> None:
        self.max_listings = max_listings

    def extract(self, content: str) -> List[RawListing]:
        text = content or ""
        images = self._images_by_alt(text)
        records: List[RawListing] = []
        for match in LISTING_PATTERN.finditer(text):
            if len(records) >= self.max_listings:
                break
            records.append(self._build(match, images))
        log.info("Pattern extractor matched %d listings", len(records))
        return records

    @staticmethod
    def _images_by_alt(html: str) -> List[tuple[str, str]]:
        if "<img" not in html:
            return []
        out = []
        for img in Selector(text=html).css("img"):
            src = img.attrib.get("src")
            if src:
                out.append((img.attrib.get("alt") or "", src))
        return out

    def _build(self, m: re.Match[str], images: List[tuple[str, str]]) -> RawListing:
        mls = m.group("mls")
        address = m.group("address").strip()
        price = coerce_int(m.group("price"))
        sqft = coerce_int(m.group("sqft")) or None
        features = extract_features(address, sqft, price)
        image_url = next((src for alt, src in images if mls in alt), None)
        return RawListing(
            mls_number=mls,
            listing_url=m.group("url") or None,
            address=address,
            price=price,
            bedrooms=coerce_int(m.group("beds")),
            bathrooms=m.group("baths"),
            sqft=sqft,
            features=features,
            title=generate_title(address, features),
            description=generate_description(address, features, price),
            image_url=image_url or placeholder_image(features),
            days_on_market=0,
        )


class OpenAIExtractor(Extractor):
    """Delegates extraction to an OpenAI chat model returning a JSON object.

    - Sends at most ``max_content_chars`` of the page.
    - One call per extraction, bounded by the HTTP timeout, never retried.
    - Anything other than ``{"properties": [...]}`` raises ``ExtractionMalformed``;
      individual items that do not validate are dropped.
    """

    name = "openai"

    def __init__(self, settings: Settings | None = None, client: Any = None) -> None:
        self.settings = settings or Settings()
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise DownstreamServiceError("OPENAI_API_KEY is not set", status_code=401)
            self._client = OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.http_timeout_secs,
                max_retries=0,
            )
        return self._client

    def _prompt(self, content: str) -> str:
        limit = self.settings.max_content_chars
        html = content[:limit]
        if len(content) > limit:
            html += " ... (truncated)"
        return EXTRACT_PROMPT.format(html=html)

    def extract(self, content: str) -> List[RawListing]:
        client = self._get_client()
        try:
            resp = client.chat.completions.create(
                model=self.settings.openai_extract_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": self._prompt(content or "")},
                ],
                response_format={"type": "json_object"},
                max_tokens=4000,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError, openai.RateLimitError) as e:
            raise DownstreamServiceError(str(e), status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            raise NetworkFailure(f"OpenAI unreachable: {e}") from e
        except openai.APIStatusError as e:
            raise NetworkFailure(f"OpenAI returned HTTP {e.status_code}") from e

        if not resp.choices:
            raise ExtractionMalformed("response has no choices")
        items = self._parse_payload(resp.choices[0].message.content)
        records: List[RawListing] = []
        for item in self._iter_dicts(items):
            if len(records) >= self.settings.max_listings:
                break
            try:
                records.append(self._to_record(item))
            except (ValidationError, ValueError, OverflowError) as e:
                log.debug("Dropping malformed listing %r: %s", item, e)
        log.info("OpenAI extractor returned %d listings", len(records))
        return records

    @staticmethod
    def _parse_payload(raw: Optional[str]) -> List[Any]:
        try:
            payload = json.loads(raw or "")
        except json.JSONDecodeError as e:
            raise ExtractionMalformed(f"response is not JSON: {e}") from e
        items = payload.get("properties") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise ExtractionMalformed("response has no 'properties' list")
        return items

    @staticmethod
    def _iter_dicts(items: List[Any]) -> Iterator[Dict[str, Any]]:
        for item in items:
            if isinstance(item, dict):
                yield item

    @staticmethod
    def _opt_str(value: Any) -> Optional[str]:
        if value is None:
            return None
        s = str(value).strip()
        return s if s and s.lower() not in ("null", "none") else None

    def _to_record(self, item: Dict[str, Any]) -> RawListing:
        address = self._opt_str(item.get("address")) or "Address not available"
        price = coerce_int(item.get("price"))
        sqft = coerce_int(item.get("sqft")) or None
        given = item.get("features")
        given = [str(f) for f in given if isinstance(f, (str, int, float))] if isinstance(given, list) else []
        features = merge_features(given, extract_features(address, sqft, price))
        return RawListing(
            address=address,
            price=price,
            bedrooms=coerce_int(item.get("bedrooms")),
            bathrooms=self._opt_str(item.get("bathrooms")) or "0",
            sqft=sqft,
            description=self._opt_str(item.get("description"))
            or generate_description(address, features, price),
            features=features,
            mls_number=self._opt_str(item.get("mlsNumber")),
            listing_url=self._opt_str(item.get("listingUrl")),
            title=generate_title(address, features),
            image_url=placeholder_image(features),
        )


def get_extractor(name: str | None = None, settings: Settings | None = None) -> Extractor:
    """Return the extraction strategy selected by ``name`` or ``settings.extractor``."""
    cfg = settings or Settings()
    choice = (name or cfg.extractor or "pattern").strip().lower()
    if choice == "openai":
        return OpenAIExtractor(cfg)
    if choice == "pattern":
        return PatternExtractor(max_listings=cfg.max_listings)
    raise ValueError(f"unknown extractor: {choice!r}")
