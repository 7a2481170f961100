from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel

from railey_listings.models import Property


class FilterConfig(BaseModel):
    query: str = ""
    max_price: Optional[int] = None


class PropertyFilter:
    """Text and price filter used by property search.

    A property matches when the query is a case-insensitive substring of its
    title, address, description or any feature tag, and its price does not
    exceed ``max_price`` when one is given. An empty query matches everything.
    """

    def __init__(self, config: FilterConfig) -> None:
        self.config = config
        self._needle = config.query.strip().lower()

    def matches(self, prop: Property) -> bool:
        if self.config.max_price is not None and prop.price > self.config.max_price:
            return False
        if not self._needle:
            return True
        fields = [prop.title, prop.address, prop.description or ""]
        fields.extend(prop.features or [])
        return any(self._needle in f.lower() for f in fields)

    def apply(self, properties: Iterable[Property]) -> List[Property]:
        return [p for p in properties if self.matches(p)]
