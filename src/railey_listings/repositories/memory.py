"""In-process store for properties, leads and chat sessions."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from railey_listings.filters import FilterConfig, PropertyFilter
from railey_listings.models import ChatMessage, ChatSession, Lead, LeadCreate, Property, RawListing
from railey_listings.services.cache import ListingCache
from railey_listings.services.normalize import normalize
from railey_listings.utils.log import get_logger

log = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Keyed property collection backed by a ``ListingCache``.

    The property map is only ever replaced as a whole, so a reader holding
    ``self._properties`` always sees one complete generation.
    """

    def __init__(self, cache: ListingCache, initial_limit: Optional[int] = 12) -> None:
        self.cache = cache
        self.initial_limit = initial_limit
        self._properties: Dict[str, Property] = {}
        self._write_lock = threading.Lock()
        self._populate_lock = threading.Lock()
        self.leads: Dict[str, Lead] = {}
        self.chat_sessions: Dict[str, ChatSession] = {}

    # Properties -----------------------------------------------------------
    def _populate(self) -> None:
        with self._populate_lock:
            if self._properties:
                return
            records = list(self.cache.get_listings())
            if self.initial_limit:
                records = records[: self.initial_limit]
            props = [normalize(r) for r in records]
            self.replace_all(props)
            log.info("Initialized store with %d properties", len(props))

    def list_properties(self) -> List[Property]:
        if not self._properties:
            self._populate()
        snapshot = self._properties
        return list(snapshot.values())

    def search_properties(self, text: str, max_price: Optional[int] = None) -> List[Property]:
        engine = PropertyFilter(FilterConfig(query=text or "", max_price=max_price))
        return engine.apply(self.list_properties())

    def count(self) -> int:
        return len(self._properties)

    def get_by_id(self, property_id: str) -> Optional[Property]:
        return self._properties.get(property_id)

    def replace_all(self, properties: Iterable[Property]) -> None:
        fresh = {p.id: p for p in properties}
        with self._write_lock:
            self._properties = fresh

    def create_property(self, raw: RawListing) -> Property:
        prop = normalize(raw).model_copy(update={"id": str(uuid.uuid4())})
        with self._write_lock:
            updated = dict(self._properties)
            updated[prop.id] = prop
            self._properties = updated
        return prop

    def rescrape(self) -> List[Property]:
        """Force a fresh extraction and swap in its properties.

        Raises the ``ScrapeError`` of the failed extraction; the current
        collection is left untouched in that case.
        """
        records = self.cache.refresh()
        props = [normalize(r) for r in records]
        self.replace_all(props)
        return props

    # Leads ----------------------------------------------------------------
    def create_lead(self, payload: LeadCreate) -> Lead:
        lead = Lead(id=str(uuid.uuid4()), created_at=_now(), **payload.model_dump())
        self.leads[lead.id] = lead
        return lead

    def get_leads(self) -> List[Lead]:
        return list(self.leads.values())

    # Chat sessions --------------------------------------------------------
    def get_chat_session(self, session_id: str) -> Optional[ChatSession]:
        return self.chat_sessions.get(session_id)

    def create_chat_session(self, session_id: str, messages: Optional[List[ChatMessage]] = None) -> ChatSession:
        now = _now()
        session = ChatSession(
            id=str(uuid.uuid4()),
            session_id=session_id,
            messages=list(messages or []),
            created_at=now,
            updated_at=now,
        )
        self.chat_sessions[session_id] = session
        return session

    def update_chat_session(self, session_id: str, messages: List[ChatMessage]) -> ChatSession:
        session = self.chat_sessions.get(session_id)
        if session is None:
            raise KeyError(f"chat session not found: {session_id}")
        updated = session.model_copy(update={"messages": list(messages), "updated_at": _now()})
        self.chat_sessions[session_id] = updated
        return updated
