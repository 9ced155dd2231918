"""Admin login service."""

import logging

from restaurant_ordering_service.auth.password_hasher import verify_password
from restaurant_ordering_service.auth.token_service import TokenService
from restaurant_ordering_service.exceptions import AuthenticationFailedError
from restaurant_ordering_service.models.admin_models import ADMIN_ROLE
from restaurant_ordering_service.repositories.admin_repository import AdminUserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies admin credentials and issues bearer tokens."""

    def __init__(self, admin_repository: AdminUserRepository, token_service: TokenService) -> None:
        """Initialize the AuthService.

        Args:
            admin_repository: Repository of admin accounts
            token_service: Issuer for signed tokens
        """
        self.admin_repository = admin_repository
        self.token_service = token_service

    async def login(self, email: str, password: str) -> str:
        """Exchange admin credentials for a bearer token.

        The error is identical for an unknown email, a non-admin account and
        a wrong password.

        Returns:
            str: Signed token embedding the admin's ID and role

        Raises:
            AuthenticationFailedError: If the credentials are not valid
        """
        user = self.admin_repository.get_by_email(email)

        if user is None or user.role != ADMIN_ROLE:
            logger.warning("Admin login failed: unknown account")
            raise AuthenticationFailedError()

        if not verify_password(password, user.password_hash):
            logger.warning(f"Admin login failed: wrong password for {user.id}")
            raise AuthenticationFailedError()

        logger.info(f"Admin {user.id} logged in")
        return self.token_service.issue_token(identity=user.id, role=user.role)
