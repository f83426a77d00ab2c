"""
Provider registry.

Holds the set of search providers, ordered by priority (higher first) with
ties broken by registration order.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from numbers import Real

from .errors import ConfigurationError
from .types import ProviderRecord

QueryTransform = Callable[[str], str]


@dataclass(frozen=True)
class Provider:
    """A registered search provider."""

    name: str
    title: str = ""
    priority: int | float = 0
    query_transform: QueryTransform | None = field(default=None, compare=False)
    order: int = field(default=0, compare=False)

    def __post_init__(self):
        if not self.title:
            object.__setattr__(self, "title", self.name)

    def transform(self, text: str) -> str:
        """Apply the provider's query transform, or return the text unchanged."""
        if self.query_transform is None:
            return text
        return self.query_transform(text)


def append_suffix(suffix: str) -> QueryTransform:
    """Create a query transform that appends a fixed suffix (e.g. a search qualifier)."""

    def transform(text: str) -> str:
        return text + suffix

    return transform


class ProviderRegistry:
    """Ordered collection of providers for one search session."""

    def __init__(self):
        self._providers: dict[str, Provider] = {}
        self._next_order = 0
        self._frozen = False

    def register(self, provider: Provider) -> Provider:
        """
        Add a provider, or replace the provider with the same name.

        A replaced provider keeps its original registration order.

        Args:
            provider: Provider to register

        Returns:
            The provider as stored, with its registration order set

        Raises:
            ConfigurationError: If the name is empty, the priority is not
                numeric, or the registry is frozen
        """
        if self._frozen:
            raise ConfigurationError(
                f"cannot register provider '{provider.name}': registry is frozen"
            )
        if not isinstance(provider.name, str) or not provider.name.strip():
            raise ConfigurationError("invalid provider name")
        if isinstance(provider.priority, bool) or not isinstance(provider.priority, Real):
            raise ConfigurationError(
                f"invalid priority {provider.priority!r} for provider '{provider.name}'"
            )

        existing = self._providers.get(provider.name)
        if existing is not None:
            order = existing.order
        else:
            order = self._next_order
            self._next_order += 1

        stored = replace(provider, order=order)
        self._providers[provider.name] = stored
        return stored

    def register_record(
        self,
        record: ProviderRecord,
        transforms: Mapping[str, QueryTransform] | None = None,
    ) -> Provider:
        """Register a provider from a discovery record."""
        name = record.get("name", "")
        transform = (transforms or {}).get(name)
        return self.register(
            Provider(
                name=name,
                title=record.get("title") or name,
                priority=record.get("priority", 0),
                query_transform=transform,
            )
        )

    def list(self) -> list[Provider]:
        """Return providers ordered by priority descending, then registration order."""
        return sorted(self._providers.values(), key=lambda p: (-p.priority, p.order))

    def get(self, name: str) -> Provider | None:
        return self._providers.get(name)

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: str) -> bool:
        return name in self._providers
