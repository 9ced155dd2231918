"""FastAPI dependencies for admin authentication.

Provides dependency injection functions for FastAPI endpoints to validate
bearer tokens carrying the admin role.
"""

from typing import Annotated

from fastapi import Header

from restaurant_ordering_service.auth.token_service import TokenClaims, TokenService
from restaurant_ordering_service.exceptions import ForbiddenError, UnauthorizedError
from restaurant_ordering_service.models.admin_models import ADMIN_ROLE


def get_admin_claims_from_header(
    authorization: Annotated[str | None, Header()] = None,
    token_service: TokenService | None = None,
) -> TokenClaims:
    """FastAPI dependency to extract and validate an admin bearer token.

    Args:
        authorization: Value of the Authorization header (injected by FastAPI)
        token_service: TokenService instance (injected as dependency)

    Returns:
        TokenClaims: Claims of the validated token

    Raises:
        UnauthorizedError: If the header is missing, malformed or the token is invalid
        ForbiddenError: If the token does not carry the admin role
    """
    if not authorization:
        raise UnauthorizedError("Missing authorization token")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Malformed authorization header")

    if token_service is None:
        raise UnauthorizedError("Token validation is not configured")

    claims = token_service.decode_token(token.strip())

    if claims.role != ADMIN_ROLE:
        raise ForbiddenError("Admin access required")

    return claims
