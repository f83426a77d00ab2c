"""
Provider clients.

Transport adapters that implement the ProviderClient protocol.
"""

from .http_client import HttpProviderClient
from .local_client import LocalProviderClient

__all__ = ["HttpProviderClient", "LocalProviderClient"]
