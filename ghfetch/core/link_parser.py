"""Parsing of the pagination `Link` response header.

The header is a comma-separated list of `<URL>; rel="NAME"` segments, e.g.::

    <https://api.github.com/repos/a/b/issues?page=2>; rel="next",
    <https://api.github.com/repos/a/b/issues?page=5>; rel="last"
"""

import logging
import re
from typing import Optional

from ghfetch.domain.exceptions import LinkHeaderError
from ghfetch.domain.models.common import LinkMap

logger = logging.getLogger(__name__)

LINK_SEGMENT = re.compile(r'<(.*)>; rel="(.*)"')

def parse_links(header: Optional[str]) -> LinkMap:
    """Parses a Link header into a relation -> URL mapping.

    Blank segments are ignored. Any other segment that does not have the
    exact `<URL>; rel="NAME"` shape fails the whole header. When a relation
    appears twice the later URL wins.

    Args:
        header: Raw header value; None or blank yields an empty mapping.

    Returns:
        Mapping of relation name to URL.

    Raises:
        LinkHeaderError: If a segment is malformed.
    """
    links: LinkMap = {}
    if not header or not header.strip():
        return links

    for segment in header.split(','):
        segment = segment.strip()
        if not segment:
            continue
        match = LINK_SEGMENT.fullmatch(segment)
        if match is None:
            logger.error(f"Malformed Link header segment: {segment!r}")
            raise LinkHeaderError(segment, header)
        url, rel = match.group(1), match.group(2)
        links[rel] = url
    return links
