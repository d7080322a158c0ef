"""Domain Layer: value objects, events, exceptions and the interfaces (ports)
implemented by the infrastructure layer.
"""
