"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .types import ProviderRecord
from .utils import parse_timeout


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FEDSEARCH_", extra="ignore"
    )

    # Query input settings
    min_query_length: int = 3
    quiet_window_ms: int = 1000
    commit_key: str = "Enter"

    # Provider call settings
    search_timeout: str = "5000ms"
    result_limit: int = 10

    # Remote provider server (enables provider discovery when set)
    server_url: str = ""

    # Static providers as "name:title:priority" entries, comma separated
    providers: str = ""
    query_suffixes: dict[str, str] = {"github": " extension:md"}

    # GitHub backend settings
    github_url: str = "https://api.github.com"
    github_token: str = ""
    github_search_user: str = ""
    github_priority: int = 0

    log_dir: str = "logs"

    @property
    def quiet_window(self) -> float:
        """Quiet window in seconds."""
        return self.quiet_window_ms / 1000

    @property
    def search_timeout_seconds(self) -> float:
        """Per-call provider timeout in seconds."""
        return parse_timeout(self.search_timeout)

    @property
    def providers_list(self) -> list[ProviderRecord]:
        """
        Get providers as parsed provider records.

        Raises:
            ConfigurationError: If an entry has a non-numeric priority
        """
        if not self.providers:
            return []

        records: list[ProviderRecord] = []
        for entry in self.providers.split(","):
            parts = [part.strip() for part in entry.split(":")]
            if not parts[0]:
                continue
            name = parts[0]
            title = parts[1] if len(parts) > 1 and parts[1] else name
            try:
                priority = int(parts[2]) if len(parts) > 2 and parts[2] else 0
            except ValueError:
                raise ConfigurationError(
                    f"invalid priority {parts[2]!r} for provider '{name}'"
                ) from None
            records.append(ProviderRecord(name=name, title=title, priority=priority))
        return records


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
