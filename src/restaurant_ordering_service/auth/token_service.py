"""Bearer token issuing and validation for admin endpoints.

Tokens are HS256 JWTs carrying the admin's identity (``id``) and ``role``
claims with a fixed expiry.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from restaurant_ordering_service.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL_SECONDS = 3600


@dataclass
class TokenClaims:
    """Decoded claims of a valid token.

    Attributes:
        identity: Admin user identifier
        role: Role claim (e.g. "admin")
        expires_at: Token expiry timestamp
    """

    identity: str
    role: str
    expires_at: datetime


class TokenService:
    """Issues and validates signed bearer tokens."""

    algorithm = "HS256"

    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS) -> None:
        """Initialize the token service.

        Args:
            secret: Signing secret
            ttl_seconds: Token lifetime in seconds

        Raises:
            ValueError: If the secret is empty
        """
        if not secret:
            raise ValueError("A token signing secret must be provided")

        self.secret = secret
        self.ttl_seconds = ttl_seconds

    def issue_token(self, identity: str, role: str) -> str:
        """Issue a signed token for an identity and role.

        Args:
            identity: Admin user identifier
            role: Role claim to embed

        Returns:
            str: Encoded JWT
        """
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": identity,
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """Validate a token and return its claims.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims: Decoded identity and role

        Raises:
            UnauthorizedError: If the token is expired, tampered with or
                missing required claims
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "id", "role"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.warning("Expired admin token presented")
            raise UnauthorizedError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid admin token presented: {e}")
            raise UnauthorizedError("Invalid token") from e

        return TokenClaims(
            identity=str(payload["id"]),
            role=str(payload["role"]),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
