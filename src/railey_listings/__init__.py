"""Listing feed, lead capture and chat backend for Railey Realty."""

__version__ = "0.1.0"
