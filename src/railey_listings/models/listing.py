"""Data models for scraped and served listings."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RawListing(BaseModel):
    """A single listing as produced by an extractor or the fallback set.

    Numeric fields are already coerced to ints by the producer; optional
    fields may be missing when the source page does not carry them.
    """

    address: str
    price: int = Field(ge=0)
    bedrooms: int = Field(ge=0)
    bathrooms: str = "0"
    sqft: Optional[int] = None
    description: Optional[str] = None
    features: Optional[List[str]] = None
    mls_number: Optional[str] = None
    listing_url: Optional[str] = None
    title: Optional[str] = None
    image_url: Optional[str] = None
    days_on_market: Optional[int] = None


class Property(BaseModel):
    """Canonical property served to the listing page, search and chat."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    address: str
    price: int = Field(ge=0)
    bedrooms: int
    bathrooms: str
    image_url: str = Field(min_length=1)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    created_at: datetime
