"""HTTP Implementations.

Contains the adapter implementing the `NetworkFetcher` interface from the
domain layer on top of httpx.
"""
