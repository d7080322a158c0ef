"""Core Application Layer: Orchestrates request logic.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the cache policy, link parsing, the transport, the pagination
service and the public ApiClient.
"""
