"""Response cache stores.

Provides concrete implementations of the CacheStore interface: a persistent
diskcache-backed store and an in-memory store.
Bounded Context: Cache Management
"""
