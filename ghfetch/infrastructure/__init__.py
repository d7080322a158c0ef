"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the request core to the outside world (HTTP, disk cache, settings,
console output) by implementing the interfaces defined in the domain layer.
"""
