"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the work
to the ApiClient or the cache store, reporting results and failures through
the UserInterface.
"""

import logging

# Core Imports
from ghfetch.core.api_client import ApiClient

# Domain Layer Imports
from ghfetch.domain.exceptions import GhFetchError
from ghfetch.domain.interfaces.cache import CacheStore
from ghfetch.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

class CommandHandler:
    """Handles incoming commands and delegates to the appropriate services."""

    def __init__(self, api_client: ApiClient, cache_store: CacheStore, ui: UserInterface):
        self.api_client = api_client
        self.cache_store = cache_store
        self.ui = ui

    def handle_get(self, url: str, cache: bool = False) -> int:
        """Handles the 'get' command: one non-paginated request."""
        logger.info(f"Handling 'get' for {url} (cache={cache})")
        try:
            data = self.api_client.request(url, cache=cache)
        except GhFetchError as e:
            logger.error(f"Request for {url} failed: {e}")
            self.ui.display_error(f"Request failed: {e}")
            return EXIT_FAILURE
        self.ui.display_data(data)
        return EXIT_OK

    def handle_paged(self, url: str, pages: int = -1, cache: bool = True) -> int:
        """Handles the 'paged' command: a full or bounded pagination walk."""
        logger.info(f"Handling 'paged' for {url} (pages={pages}, cache={cache})")
        try:
            data = self.api_client.request_paged(url, pages=pages, cache=cache)
        except GhFetchError as e:
            logger.error(f"Paged request for {url} failed: {e}")
            self.ui.display_error(f"Paged request failed: {e}")
            return EXIT_FAILURE
        self.ui.display_data(data)
        count = len(data) if isinstance(data, list) else 1
        self.ui.display_info(f"{count} item(s), {self.api_client.transport.num_api_calls} live call(s) in current window")
        return EXIT_OK

    def handle_clear_cache(self) -> int:
        """Handles the 'clear-cache' command."""
        self.cache_store.clear()
        self.ui.display_info("Cache cleared.")
        return EXIT_OK
