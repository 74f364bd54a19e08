"""Security Adapters — bcrypt password hashing (passlib) and JWT issuing (python-jose).

Invariants:
    - Hashes use bcrypt with the configured work factor (default 10 rounds)
    - verify() is constant-time and returns False for malformed hashes
    - Issued tokens always carry iat and exp; verification is not done here

Design Decisions:
    - Adapters satisfy core/boundary_protocols.py and are built from Settings
      per request through FastAPI dependencies (overridable in tests)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from jose import jwt
from passlib.context import CryptContext

from koinonia.config import Settings, get_settings

logger = logging.getLogger(__name__)


class PasslibCredentialStore:
    """bcrypt-backed CredentialStore."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, secret: str) -> str:
        return self._context.hash(secret)

    def verify(self, secret: str, hashed: str) -> bool:
        try:
            return self._context.verify(secret, hashed)
        except (ValueError, TypeError) as e:
            logger.warning(f"Unverifiable password hash: {e}")
            return False


class JoseTokenIssuer:
    """HS256 JWT TokenIssuer."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_days: int = 7):
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(days=expires_days)

    def issue(self, claims: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + self._expires}
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


def get_credential_store(
    settings: Settings = Depends(get_settings),
) -> PasslibCredentialStore:
    return PasslibCredentialStore(rounds=settings.bcrypt_rounds)


def get_token_issuer(
    settings: Settings = Depends(get_settings),
) -> JoseTokenIssuer:
    return JoseTokenIssuer(
        settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expires_days,
    )
