"""Domain Event definitions.

Represents significant occurrences during request orchestration that other
parts of the system (logging, metrics, tests) might react to.
"""
