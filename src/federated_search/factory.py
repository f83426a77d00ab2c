"""
Session and client factories.

Builds provider clients and search sessions from Settings.
"""

from .aggregator import RenderSink
from .backends import GithubSearcher
from .clients import HttpProviderClient, LocalProviderClient
from .normalizer import QueryNormalizer
from .registry import ProviderRegistry, append_suffix
from .session import ProviderDiscovery, SearchSession
from .settings import Settings, get_settings


def create_provider_client(
    settings: Settings | None = None,
) -> HttpProviderClient | LocalProviderClient:
    """
    Create the provider client for the configured transport.

    A configured server URL selects the remote HTTP client; otherwise the
    built-in backends run in process.
    """
    settings = settings or get_settings()
    if settings.server_url:
        return HttpProviderClient(
            settings.server_url,
            timeout=settings.search_timeout_seconds,
            limit=settings.result_limit,
        )

    github = GithubSearcher(
        url=settings.github_url,
        token=settings.github_token,
        search_user=settings.github_search_user,
        priority=settings.github_priority,
        per_page=settings.result_limit,
    )
    return LocalProviderClient([github], timeout=settings.search_timeout_seconds)


def create_session(
    sink: RenderSink,
    settings: Settings | None = None,
    client: HttpProviderClient | LocalProviderClient | None = None,
) -> tuple[SearchSession, ProviderDiscovery | None]:
    """
    Create a search session and the discovery step to start it with.

    Statically configured providers are registered up front; when none are
    configured, providers are discovered from the client at start.

    Returns:
        Tuple of (session, discovery or None)
    """
    settings = settings or get_settings()
    client = client or create_provider_client(settings)
    transforms = {
        name: append_suffix(suffix) for name, suffix in settings.query_suffixes.items()
    }

    registry = ProviderRegistry()
    for record in settings.providers_list:
        registry.register_record(record, transforms)

    normalizer = QueryNormalizer(
        min_length=settings.min_query_length, quiet_window=settings.quiet_window
    )
    session = SearchSession(
        registry, client, sink, normalizer=normalizer, transforms=transforms
    )

    discovery = None if len(registry) else client.discover
    return session, discovery
