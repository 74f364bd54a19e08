"""Boundary Protocols — contracts between core/services and external collaborators.

Invariants:
    - Services depend on these Protocols, never on passlib or jose directly
    - Implementations live in infrastructure/security.py and are injected per request

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Any, Protocol


class CredentialStore(Protocol):
    """Password hashing with a fixed work factor and constant-time verification."""
    def hash(self, secret: str) -> str: ...
    def verify(self, secret: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    """Signs a claims payload into a time-bounded token string."""
    def issue(self, claims: dict[str, Any]) -> str: ...
