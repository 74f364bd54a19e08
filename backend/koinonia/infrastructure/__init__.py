"""Infrastructure Layer — database sessions, security adapters, logging.

Invariants:
    - Infrastructure never contains domain rules (those live in core/)
    - Store exceptions are mapped to core/errors.py types before leaving this layer
"""
