"""
Federated Search Package

A federated search dispatcher: fans each query out to independent search
providers concurrently, cancels stale lookups when a newer query arrives,
isolates provider failures and merges results by provider priority.
"""

from federated_search.aggregator import RecordingRenderSink, ResultAggregator
from federated_search.dispatcher import SearchDispatcher
from federated_search.errors import ConfigurationError, ProviderCallError
from federated_search.logger import setup_logging
from federated_search.normalizer import InputEvent, QueryNormalizer, QueryToken
from federated_search.registry import Provider, ProviderRegistry
from federated_search.session import SearchSession

__version__ = "1.0.0"
__all__ = [
    "ConfigurationError",
    "InputEvent",
    "Provider",
    "ProviderCallError",
    "ProviderRegistry",
    "QueryNormalizer",
    "QueryToken",
    "RecordingRenderSink",
    "ResultAggregator",
    "SearchDispatcher",
    "SearchSession",
    "setup_logging",
]
