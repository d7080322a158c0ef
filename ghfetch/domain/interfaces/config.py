"""Interface for configuration providers.

Keys are dotted paths grouped by concern: `mirror.*` for fetching behavior
(cache mode, request rate, source address, cache location) and `logging.*`
for log output.
"""

import abc
from typing import Any


class ConfigurationProvider(abc.ABC):
    """Source of configuration values for the fetcher."""

    @abc.abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Gets a configuration value by dotted key.

        Args:
            key: The configuration key, e.g. 'mirror.cache_mode'.
            default: Value to return when no source defines the key.

        Returns:
            The configured value, or `default`.
        """
        pass

    @abc.abstractmethod
    def load_config(self) -> None:
        """(Re)reads every configuration source."""
        pass
