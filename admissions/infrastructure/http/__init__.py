"""Outbound HTTP helpers."""

from .client import HttpResponse, JsonHttpClient

__all__ = ["HttpResponse", "JsonHttpClient"]
