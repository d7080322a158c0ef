"""Interface for presenting results to the user.

Defines the contract for displaying fetched data, information and errors,
allowing different UI implementations (e.g., rich console, plain text).
"""

import abc
from typing import Any


class UserInterface(abc.ABC):
    """Abstract Base Class for user-facing output."""

    @abc.abstractmethod
    def display_data(self, data: Any, **kwargs: Any) -> None:
        """Displays a decoded JSON value.

        Args:
            data: The decoded value (list, dict or scalar) to render.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass
