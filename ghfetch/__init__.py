"""ghfetch: rate-limited, cache-aware fetcher for paginated JSON APIs."""

__version__ = "0.1.0"
