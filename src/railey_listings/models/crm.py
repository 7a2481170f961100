"""Lead and chat session records kept next to the property store."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeadCreate(_CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = None
    budget: Optional[str] = None
    interests: Optional[str] = None


class Lead(LeadCreate):
    id: str
    created_at: datetime


class ChatMessage(_CamelModel):
    id: str
    content: str
    is_user: bool
    timestamp: str


class ChatSession(_CamelModel):
    id: str
    session_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
