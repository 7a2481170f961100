"""Chat widget replies: OpenAI-backed with a keyword-matching fallback."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import openai
from openai import OpenAI

from railey_listings.config import Settings
from railey_listings.models import ChatMessage, Property
from railey_listings.utils.log import get_logger

log = get_logger(__name__)

GENERIC_REPLY = (
    "I'm here to help you discover beautiful Deep Creek Lake and Garrett County properties! "
    "What type of home are you looking for?"
)
EMPTY_REPLY = (
    "I'm here to help you find the perfect Deep Creek Lake property! What type of home interests you?"
)

# Checked in order; the first rule with a matching substring wins.
KEYWORD_REPLIES: List[tuple[tuple[str, ...], str]] = [
    (
        ("deep creek", "lake", "lakefront"),
        "Deep Creek Lake is absolutely beautiful! We have stunning lakefront properties, lake access homes, "
        "and lake view properties available. The lake offers year-round recreation - swimming, boating, and "
        "fishing in summer, ice fishing in winter. Are you interested in direct lakefront access or would a "
        "lake view property work for you?",
    ),
    (
        ("ski", "wisp", "resort", "slope"),
        "Wisp Resort is fantastic for skiing and year-round mountain activities! We have ski-in/ski-out condos, "
        "mountain homes near the slopes, and properties perfect for vacation rentals. Are you looking for a "
        "vacation home or investment property near Wisp?",
    ),
    (
        ("bedroom", "bed", "size"),
        "Great question about size! Our Deep Creek Lake properties range from cozy 1-bedroom condos to "
        "spacious 5+ bedroom mountain estates ideal for large families or vacation rentals. What size property "
        "would work best for your needs?",
    ),
    (
        ("price", "cost", "budget", "afford"),
        "Deep Creek Lake offers properties for various budgets! We have charming cabins starting around $200k, "
        "family homes in the $300-500k range, and luxury lakefront estates up to $750k+. What's your target "
        "budget range?",
    ),
    (
        ("schedule", "showing", "view", "visit"),
        "I'd love to arrange a property showing for you! Our local agents know every neighborhood and can show "
        "you the best properties for your needs. Would you like me to connect you with one of our agents to "
        "schedule a visit?",
    ),
    (
        ("vacation", "rental", "investment", "income"),
        "Deep Creek Lake has an excellent vacation rental market! Properties near the lake and Wisp Resort stay "
        "booked, especially during peak seasons. Are you thinking about a property for personal use that could "
        "also generate rental income?",
    ),
    (
        ("area", "location", "neighborhood", "garrett"),
        "Garrett County has wonderful diverse areas! Lakefront properties offer direct access to Deep Creek Lake, "
        "mountain properties near Wisp Resort provide ski access, and rural areas offer privacy with acreage. "
        "What type of setting appeals to you most?",
    ),
    (
        ("thanks", "thank"),
        "You're very welcome! I'm here to help you find your perfect Deep Creek Lake property. What else would "
        "you like to know about our beautiful area?",
    ),
    (
        ("hello", "hi", "hey"),
        "Hello and welcome to Railey Realty! I'm excited to help you explore Deep Creek Lake and Garrett County "
        "properties. What type of property experience are you looking for?",
    ),
]

DEFAULT_KEYWORD_REPLY = (
    "I'm passionate about helping people discover the magic of Deep Creek Lake and Garrett County! Whether "
    "you're dreaming of lakefront mornings, afternoon skiing at Wisp Resort, or peaceful evenings in a mountain "
    "retreat, we have incredible properties to explore. What draws you to our beautiful area?"
)

SYSTEM_PROMPT = """You are a helpful real estate assistant for Railey Realty, specializing in Deep Creek Lake and Garrett County, Maryland properties. You help customers find lakefront homes, ski properties near Wisp Resort, mountain retreats, and investment properties.

Current available properties (sample):
{properties}

Guidelines:
- Be conversational, helpful, and knowledgeable about the local area
- Ask qualifying questions to understand buyer needs
- Offer to schedule showings or connect them with agents
- Keep responses concise but informative (2-3 sentences max)

If someone asks about specific properties, reference the current listings. If they want to schedule a showing or speak with an agent, offer to collect their contact information."""


def keyword_reply(message: str) -> str:
    text = (message or "").lower()
    for keywords, reply in KEYWORD_REPLIES:
        if any(k in text for k in keywords):
            return reply
    return DEFAULT_KEYWORD_REPLY


def _property_context(properties: Sequence[Property]) -> str:
    return "\n".join(
        f"{p.title} - {p.address} - ${p.price:,} - {p.bedrooms}bed/{p.bathrooms}bath" for p in properties[:5]
    )


def _history_context(history: Sequence[ChatMessage]) -> str:
    return "\n".join(f"{'User' if m.is_user else 'Assistant'}: {m.content}" for m in history[-6:])


class ChatResponder:
    """Generates assistant replies for the chat widget.

    Without an API key, or when the account is rate limited or out of quota,
    replies come from ``keyword_reply``.
    """

    def __init__(self, settings: Settings | None = None, client: Any = None) -> None:
        self.settings = settings or Settings()
        self._client = client

    def _get_client(self) -> Optional[Any]:
        if self._client is None and self.settings.openai_api_key:
            self._client = OpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.http_timeout_secs)
        return self._client

    def reply(self, message: str, history: Sequence[ChatMessage], properties: Sequence[Property]) -> str:
        client = self._get_client()
        if client is None:
            return keyword_reply(message)
        try:
            completion = client.chat.completions.create(
                model=self.settings.openai_chat_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT.format(properties=_property_context(properties))},
                    {
                        "role": "user",
                        "content": f"Conversation history:\n{_history_context(history)}\n\nLatest message: {message}",
                    },
                ],
                max_tokens=200,
                temperature=0.7,
            )
        except openai.RateLimitError as e:
            log.warning("Chat model rate limited, using keyword reply: %s", e)
            return keyword_reply(message)
        except openai.OpenAIError as e:
            log.warning("Chat model call failed: %s", e)
            return GENERIC_REPLY
        content = completion.choices[0].message.content if completion.choices else None
        return content or EMPTY_REPLY
