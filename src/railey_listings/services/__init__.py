"""Service layer for listing acquisition, caching and chat."""

from .cache import ListingCache
from .chat import ChatResponder, keyword_reply
from .errors import (
    DownstreamServiceError,
    ExtractionEmpty,
    ExtractionError,
    ExtractionMalformed,
    NetworkFailure,
    ScrapeError,
)
from .extractors import Extractor, OpenAIExtractor, PatternExtractor, get_extractor
from .fallback import get_fallback
from .normalize import coerce_int, normalize
from .source import ListingSource

__all__ = [
    "ChatResponder",
    "DownstreamServiceError",
    "ExtractionEmpty",
    "ExtractionError",
    "ExtractionMalformed",
    "Extractor",
    "ListingCache",
    "ListingSource",
    "NetworkFailure",
    "OpenAIExtractor",
    "PatternExtractor",
    "ScrapeError",
    "coerce_int",
    "get_extractor",
    "get_fallback",
    "keyword_reply",
    "normalize",
]
