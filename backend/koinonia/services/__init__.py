"""Services Layer — async orchestration of store access around the pure core.

Invariants:
    - One service class per resource, constructed per request with an AsyncSession
    - Every write goes through services/transactions.atomic

Design Decisions:
    - Services return plain dicts/ORM rows; routes only pick status codes
"""
