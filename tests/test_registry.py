"""
Unit tests for ProviderRegistry.

Tests registration, validation, ordering and freezing.
"""

import pytest

from federated_search.errors import ConfigurationError
from federated_search.registry import Provider, ProviderRegistry, append_suffix


class TestProvider:
    def test_title_defaults_to_name(self):
        assert Provider(name="github").title == "github"

    def test_transform_identity_without_transform(self):
        assert Provider(name="slack").transform("hello") == "hello"

    def test_transform_applies_function(self):
        provider = Provider(name="github", query_transform=append_suffix(" extension:md"))
        assert provider.transform("hello") == "hello extension:md"

    def test_provider_is_immutable(self):
        provider = Provider(name="github")
        with pytest.raises(AttributeError):
            provider.priority = 3  # type: ignore[misc]


class TestProviderRegistry:
    """Test suite for ProviderRegistry."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = ProviderRegistry()

    def test_list_orders_by_priority_descending(self):
        self.registry.register(Provider(name="github", priority=5))
        self.registry.register(Provider(name="slack", priority=10))
        self.registry.register(Provider(name="wiki", priority=1))

        assert [p.name for p in self.registry.list()] == ["slack", "github", "wiki"]

    def test_ties_keep_registration_order(self):
        for name in ["c", "a", "b"]:
            self.registry.register(Provider(name=name, priority=1))

        assert [p.name for p in self.registry.list()] == ["c", "a", "b"]

    def test_register_assigns_order(self):
        first = self.registry.register(Provider(name="one"))
        second = self.registry.register(Provider(name="two"))
        assert (first.order, second.order) == (0, 1)

    def test_replace_by_name_keeps_position(self):
        self.registry.register(Provider(name="a", priority=1))
        self.registry.register(Provider(name="b", priority=1))
        self.registry.register(Provider(name="a", title="A again", priority=1))

        providers = self.registry.list()
        assert [p.name for p in providers] == ["a", "b"]
        assert providers[0].title == "A again"
        assert len(self.registry) == 2

    def test_replace_can_change_priority(self):
        self.registry.register(Provider(name="a", priority=1))
        self.registry.register(Provider(name="b", priority=2))
        self.registry.register(Provider(name="a", priority=3))

        assert [p.name for p in self.registry.list()] == ["a", "b"]

    def test_float_priority_is_accepted(self):
        self.registry.register(Provider(name="a", priority=1.5))
        assert "a" in self.registry

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_is_rejected(self, name):
        with pytest.raises(ConfigurationError):
            self.registry.register(Provider(name=name))

    @pytest.mark.parametrize("priority", ["10", None, True])
    def test_non_numeric_priority_is_rejected(self, priority):
        with pytest.raises(ConfigurationError, match="invalid priority"):
            self.registry.register(Provider(name="a", priority=priority))  # type: ignore[arg-type]

    def test_register_after_freeze_is_rejected(self):
        self.registry.register(Provider(name="a"))
        self.registry.freeze()

        assert self.registry.frozen
        with pytest.raises(ConfigurationError, match="frozen"):
            self.registry.register(Provider(name="b"))

    def test_register_record_applies_transform(self):
        transforms = {"github": append_suffix(" extension:md")}
        provider = self.registry.register_record(
            {"name": "github", "title": "Github", "priority": 5}, transforms
        )

        assert provider.title == "Github"
        assert provider.transform("q") == "q extension:md"

    def test_register_record_defaults_title(self):
        provider = self.registry.register_record(
            {"name": "slack", "title": "", "priority": 1}
        )
        assert provider.title == "slack"

    def test_get(self):
        self.registry.register(Provider(name="a"))
        assert self.registry.get("a").name == "a"
        assert self.registry.get("missing") is None
