"""Pagination Service: walks `next` links of a paged resource.

Each page is fetched through the Transport with a cache decision from the
cache policy, decoded, and inspected for a `Link` header. The walk stops when
there is no next link, when the page budget runs out, or when a page comes
back as a soft failure. Pages are merged as an order-preserving union with
exact duplicates removed.
"""

import json
import logging
from typing import Any, Callable, List

# Core Imports
from ghfetch.core.cache_policy import should_use_cache
from ghfetch.core.json_decoder import decode
from ghfetch.core.link_parser import parse_links
from ghfetch.core.transport import Transport

# Domain Layer Imports
from ghfetch.domain.models.common import CacheMode, RequestKind, Url, REL_NEXT, REL_LAST, UNBOUNDED_PAGES

logger = logging.getLogger(__name__)

def _identity(value: Any) -> str:
    """Canonical form of a JSON value used for exact-value comparison."""
    return json.dumps(value, sort_keys=True, separators=(',', ':'))

def merge_pages(pages: List[Any]) -> List[Any]:
    """Unions decoded pages in order, dropping exact duplicate elements.

    A page that decoded to a single object (not a list) counts as one element.
    """
    merged: List[Any] = []
    seen = set()
    for page in pages:
        items = page if isinstance(page, list) else [page]
        for item in items:
            key = _identity(item)
            if key in seen:
                continue
            seen.add(key)
            merged.append(item)
    return merged

class PaginatedFetcher:
    """Fetches one or more pages of a paged resource."""

    def __init__(self, transport: Transport, cache_mode: Callable[[], CacheMode]):
        """Initializes the PaginatedFetcher.

        Args:
            transport: Transport performing the single-page fetches.
            cache_mode: Returns the resolved cache mode; called once per page.
        """
        self.transport = transport
        self.cache_mode = cache_mode

    def fetch_pages(self, url: Url, pages_remaining: int = UNBOUNDED_PAGES, cache: bool = True) -> Any:
        """Fetches pages starting at `url`.

        Args:
            url: URL of the first page.
            pages_remaining: Maximum number of pages to visit, -1 for no limit.
            cache: Caller's cache preference, subject to the cache policy.

        Returns:
            The decoded first page when only one page was visited, otherwise
            the union of all visited pages. A soft failure on the first page
            yields an empty list.

        Raises:
            TransportFailure: On a hard failure of any page.
            ResponseDecodeError: If a page body is not valid JSON.
            LinkHeaderError: If a Link header is malformed.
        """
        visited: List[Any] = []
        current_url = url

        while True:
            use_cache = should_use_cache(self.cache_mode(), cache, RequestKind.PAGED)
            result = self.transport.fetch_raw(current_url, use_cache)
            result.raise_for_failure()
            if not result.ok:
                visited.append([])
                break

            decoded = decode(result.response)
            visited.append(decoded)

            link_header = result.response.header("link")
            if link_header is None:
                break
            links = parse_links(link_header)

            if pages_remaining > 0:
                pages_remaining -= 1
                if pages_remaining == 0:
                    logger.debug(f"Page budget exhausted at {current_url}")
                    break

            next_url = links.get(REL_NEXT)
            if next_url is None:
                break
            # The terminal page is always fetched fresh
            if next_url == links.get(REL_LAST):
                cache = False
            current_url = Url(next_url)

        logger.debug(f"Paged request for {url} visited {len(visited)} page(s)")
        if len(visited) == 1:
            return visited[0]
        return merge_pages(visited)
