"""Mapping of raw listing records onto the canonical ``Property`` model."""

from __future__ import annotations

import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from railey_listings.models import Property, RawListing

from .enrich import extract_features, generate_title, placeholder_image


def coerce_int(value: Any, default: int = 0) -> int:
    """Coerce loosely formatted numbers to ``int``.

    Accepts ints, floats and strings such as "$325,000" or "3 beds"; the
    digits of the integer part are kept and everything else is dropped.
    Anything without digits (``None``, "", "n/a"), non-finite floats and
    negative numbers ("-5", -3) yield ``default``.

    Examples: "$325,000" -> 325000, "2,100 SqFt" -> 2100, 4.0 -> 4
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value >= 0 else default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value >= 0 else default
    if value is None:
        return default
    text = str(value).strip().split(".")[0]
    if re.match(r"^[^0-9]*-\s*\d", text):
        return default
    digits = re.sub(r"[^0-9]", "", text)
    if not digits:
        return default
    return int(digits)


def normalize(raw: RawListing, now: Optional[datetime] = None) -> Property:
    """Build a ``Property`` from a raw record; never raises for a valid record."""
    price = max(0, coerce_int(raw.price))
    sqft = coerce_int(raw.sqft) if raw.sqft is not None else None
    features = list(raw.features) if raw.features is not None else None
    tags = features or extract_features(raw.address, sqft, price)
    return Property(
        id=raw.mls_number or str(uuid.uuid4()),
        title=raw.title or generate_title(raw.address, tags),
        address=raw.address,
        price=price,
        bedrooms=max(0, coerce_int(raw.bedrooms)),
        bathrooms=str(raw.bathrooms or "0"),
        image_url=raw.image_url or placeholder_image(tags),
        description=raw.description or None,
        features=features,
        created_at=now or datetime.now(timezone.utc),
    )
