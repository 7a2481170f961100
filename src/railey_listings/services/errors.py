"""Failure taxonomy for listing acquisition."""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for every failure of fetching or extracting listings."""


class NetworkFailure(ScrapeError):
    """The source page or extraction service could not be reached."""


class ExtractionEmpty(ScrapeError):
    """Extraction ran but produced no listings."""


class ExtractionMalformed(ScrapeError):
    """The extraction service answered with an unexpected shape."""


class DownstreamServiceError(ScrapeError):
    """The extraction service refused the call (auth, quota, missing key)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(ScrapeError):
    """Fetching or extraction failed in an unexpected way."""
