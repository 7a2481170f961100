"""Data models for listings, leads and chat sessions."""

from .listing import Property, RawListing
from .crm import ChatMessage, ChatSession, Lead, LeadCreate

__all__ = ["ChatMessage", "ChatSession", "Lead", "LeadCreate", "Property", "RawListing"]
