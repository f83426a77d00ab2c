"""
Common type definitions for the federated search dispatcher.

TypedDict definitions for payloads that cross the provider boundary.
"""

from datetime import datetime
from typing import TypedDict


class ResultItem(TypedDict):
    """Individual search result returned by a provider."""

    title: str
    link: str
    description: str
    timestamp: datetime | None


class ProviderRecord(TypedDict):
    """Provider description as supplied by provider discovery."""

    name: str
    title: str
    priority: int
