"""Defines common Value Objects used across the request orchestration layer.

These objects represent simple values or concepts like URLs, cache keys,
cache modes and pagination links, ensuring consistency and type safety.
"""

import enum
from typing import NewType, Dict

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
Url = NewType("Url", str)                      # Absolute resource URL
CacheKey = NewType("CacheKey", str)            # Key of a cached response (the request URL)
RelationName = NewType("RelationName", str)    # Link relation, e.g. 'next', 'last'

# Mapping of link relation -> URL, rebuilt for every response
LinkMap = Dict[str, str]

# === Request Context ===

class CacheMode(enum.Enum):
    """Operating mode controlling the default cache usage policy."""
    DEV = "dev"
    PROD = "prod"


class RequestKind(enum.Enum):
    """Whether a call is part of a pagination sweep or a single lookup."""
    PAGED = "paged"
    NON_PAGED = "non_paged"


# Pagination relation names
REL_NEXT = RelationName("next")
REL_LAST = RelationName("last")
REL_PREV = RelationName("prev")
REL_FIRST = RelationName("first")

# Page count meaning "follow next links until they run out"
UNBOUNDED_PAGES = -1
