from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Body, FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from railey_listings.config import Settings
from railey_listings.models import ChatMessage, LeadCreate
from railey_listings.repositories import MemoryStore
from railey_listings.services import (
    ChatResponder,
    DownstreamServiceError,
    ListingCache,
    ListingSource,
    ScrapeError,
    get_extractor,
)
from railey_listings.utils.log import get_logger

load_dotenv()

log = get_logger(__name__)


def build_store(settings: Settings) -> MemoryStore:
    cache = ListingCache(
        source=ListingSource(settings),
        extractor=get_extractor(settings=settings),
        ttl_secs=settings.cache_ttl_secs,
    )
    return MemoryStore(cache, initial_limit=settings.initial_limit)


settings = Settings.from_env()
store = build_store(settings)
responder = ChatResponder(settings)
app = FastAPI(title="Railey Listings")


def _dump(models: List[BaseModel]) -> List[Dict[str, Any]]:
    return [m.model_dump(mode="json", by_alias=True) for m in models]


def _parse_int(s: Optional[str]) -> Optional[int]:
    try:
        return int(s) if s not in (None, "") else None
    except (TypeError, ValueError):
        return None


@app.get("/api/properties")
def list_properties() -> JSONResponse:
    return JSONResponse(_dump(store.list_properties()))


@app.get("/api/properties/search")
def search_properties(
    q: str = Query("", description="Text matched against title, address, description and features"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
) -> JSONResponse:
    return JSONResponse(_dump(store.search_properties(q, _parse_int(max_price))))


@app.get("/api/properties/{property_id}")
def get_property(property_id: str) -> JSONResponse:
    prop = store.get_by_id(property_id)
    if prop is None:
        return JSONResponse({"message": "Property not found"}, status_code=404)
    return JSONResponse(prop.model_dump(mode="json", by_alias=True))


@app.post("/api/scrape-railey")
def scrape_railey() -> JSONResponse:
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        props = store.rescrape()
    except DownstreamServiceError as e:
        log.warning("Manual scrape refused by extraction service: %s", e)
        return JSONResponse(
            {
                "success": False,
                "message": "Extraction service unavailable",
                "timestamp": timestamp,
                "properties_count": store.count(),
                "error": str(e),
            },
            status_code=503,
        )
    except ScrapeError as e:
        log.warning("Manual scrape failed (%s): %s", type(e).__name__, e)
        return JSONResponse(
            {
                "success": False,
                "message": "No new properties found, keeping cached data",
                "timestamp": timestamp,
                "properties_count": store.count(),
                "error": str(e),
            }
        )
    return JSONResponse(
        {
            "success": True,
            "message": f"Successfully scraped {len(props)} properties",
            "timestamp": timestamp,
            "properties_count": len(props),
        }
    )


@app.get("/api/scraper-status")
def scraper_status() -> JSONResponse:
    fetched = store.cache.last_fetched
    return JSONResponse(
        {
            "last_scrape_time": int(fetched * 1000) if fetched else 0,
            "last_scrape_formatted": datetime.fromtimestamp(fetched).strftime("%c") if fetched else "Never",
            "cached_properties_count": len(store.cache.cached),
            "is_recent": store.cache.is_fresh(),
        }
    )


@app.post("/api/leads")
def create_lead(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    try:
        data = LeadCreate.model_validate(payload)
    except ValidationError as e:
        log.info("Rejected lead: %s", e.errors())
        return JSONResponse({"message": "Invalid lead data"}, status_code=400)
    lead = store.create_lead(data)
    return JSONResponse(lead.model_dump(mode="json", by_alias=True), status_code=201)


@app.get("/api/leads")
def list_leads() -> JSONResponse:
    return JSONResponse(_dump(store.get_leads()))


@app.get("/api/chat/{session_id}")
def get_chat_session(session_id: str) -> JSONResponse:
    session = store.get_chat_session(session_id)
    if session is None:
        return JSONResponse({"message": "Chat session not found"}, status_code=404)
    return JSONResponse(session.model_dump(mode="json", by_alias=True))


def _message(content: str, is_user: bool) -> ChatMessage:
    return ChatMessage(
        id=str(uuid.uuid4()),
        content=content,
        is_user=is_user,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/api/chat")
def chat(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    session_id = payload.get("sessionId")
    text = payload.get("message")
    if not isinstance(session_id, str) or not session_id or not isinstance(text, str) or not text:
        return JSONResponse({"message": "Session ID and message are required"}, status_code=400)

    user_msg = _message(text, is_user=True)
    session = store.get_chat_session(session_id)
    if session is None:
        session = store.create_chat_session(session_id, [user_msg])
    else:
        session = store.update_chat_session(session_id, session.messages + [user_msg])

    reply = responder.reply(text, session.messages, store.list_properties())
    session = store.update_chat_session(session_id, session.messages + [_message(reply, is_user=False)])
    return JSONResponse(session.model_dump(mode="json", by_alias=True))
