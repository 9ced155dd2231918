"""Unit tests for password hashing, tokens and AuthService."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt
import pytest

from restaurant_ordering_service.auth.password_hasher import hash_password, verify_password
from restaurant_ordering_service.auth.token_service import TokenService
from restaurant_ordering_service.exceptions import AuthenticationFailedError, UnauthorizedError
from restaurant_ordering_service.models.admin_models import AdminUser
from restaurant_ordering_service.repositories.admin_repository import AdminUserRepository
from restaurant_ordering_service.services.auth_service import AuthService

SECRET = "test-secret"


@pytest.mark.unit
class TestPasswordHasher:
    """Tests for password hashing."""

    def test_hash_is_salted(self) -> None:
        """Test that the same password hashes differently each time."""
        first = hash_password("adminpassword")
        second = hash_password("adminpassword")

        assert first != second
        assert "adminpassword" not in first

    def test_verify_password(self) -> None:
        """Test verification of correct and incorrect passwords."""
        stored = hash_password("adminpassword")

        assert verify_password("adminpassword", stored) is True
        assert verify_password("wrongpassword", stored) is False

    def test_fixed_salt_is_deterministic(self) -> None:
        """Test that an explicit salt reproduces the hash."""
        assert hash_password("pw", salt="00ff") == hash_password("pw", salt="00ff")

    @pytest.mark.parametrize("stored", ["", "nocolon", "zz:abcd"])
    def test_malformed_hash_never_verifies(self, stored: str) -> None:
        """Test that malformed stored hashes are rejected rather than raising."""
        assert verify_password("pw", stored) is False


@pytest.mark.unit
class TestTokenService:
    """Tests for TokenService."""

    @pytest.fixture
    def token_service(self) -> TokenService:
        """Create a TokenService with a test secret."""
        return TokenService(secret=SECRET)

    def test_requires_secret(self) -> None:
        """Test that an empty secret is refused."""
        with pytest.raises(ValueError):
            TokenService(secret="")

    def test_round_trip_claims(self, token_service: TokenService) -> None:
        """Test that identity and role survive issue and decode."""
        token = token_service.issue_token(identity="user_1", role="admin")

        claims = token_service.decode_token(token)

        assert claims.identity == "user_1"
        assert claims.role == "admin"
        remaining = claims.expires_at - datetime.now(UTC)
        assert timedelta(minutes=59) < remaining <= timedelta(hours=1)

    def test_expired_token(self) -> None:
        """Test that an expired token is rejected."""
        service = TokenService(secret=SECRET, ttl_seconds=-10)
        token = service.issue_token(identity="user_1", role="admin")

        with pytest.raises(UnauthorizedError) as exc_info:
            service.decode_token(token)

        assert exc_info.value.message == "Token has expired"

    def test_wrong_signature(self, token_service: TokenService) -> None:
        """Test that a token signed with another secret is rejected."""
        token = TokenService(secret="other-secret").issue_token(identity="user_1", role="admin")

        with pytest.raises(UnauthorizedError) as exc_info:
            token_service.decode_token(token)

        assert exc_info.value.message == "Invalid token"

    def test_missing_role_claim(self, token_service: TokenService) -> None:
        """Test that a token without a role claim is rejected."""
        token = jwt.encode(
            {"id": "user_1", "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError):
            token_service.decode_token(token)

    def test_garbage_token(self, token_service: TokenService) -> None:
        """Test that a non-JWT string is rejected."""
        with pytest.raises(UnauthorizedError):
            token_service.decode_token("not-a-token")


@pytest.mark.unit
class TestAuthService:
    """Test suite for AuthService."""

    @pytest.fixture
    def admin(self) -> AdminUser:
        """Stored admin account."""
        return AdminUser(
            id="abcdefabcdefabcdefabcdef",
            name="Admin User",
            email="admin@example.com",
            password_hash=hash_password("adminpassword"),
        )

    @pytest.fixture
    def mock_admin_repo(self, admin: AdminUser) -> AdminUserRepository:
        """Create a mock AdminUserRepository returning the admin."""
        repo = MagicMock(spec=AdminUserRepository)
        repo.get_by_email.return_value = admin
        return repo

    @pytest.fixture
    def auth_service(self, mock_admin_repo: AdminUserRepository) -> AuthService:
        """Create an AuthService with mocked dependencies."""
        return AuthService(mock_admin_repo, TokenService(secret=SECRET))

    @pytest.mark.asyncio
    async def test_login_success(self, auth_service: AuthService, admin: AdminUser) -> None:
        """Test that valid credentials yield a token with the admin's ID and role."""
        token = await auth_service.login("admin@example.com", "adminpassword")

        claims = TokenService(secret=SECRET).decode_token(token)
        assert claims.identity == admin.id
        assert claims.role == "admin"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service: AuthService) -> None:
        """Test that a wrong password is rejected."""
        with pytest.raises(AuthenticationFailedError) as exc_info:
            await auth_service.login("admin@example.com", "wrongpassword")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_email(
        self, auth_service: AuthService, mock_admin_repo: MagicMock
    ) -> None:
        """Test that an unknown email gets the same error as a wrong password."""
        mock_admin_repo.get_by_email.return_value = None

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await auth_service.login("nobody@example.com", "adminpassword")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_non_admin_role(
        self, auth_service: AuthService, mock_admin_repo: MagicMock, admin: AdminUser
    ) -> None:
        """Test that accounts without the admin role cannot log in."""
        mock_admin_repo.get_by_email.return_value = admin.model_copy(update={"role": "staff"})

        with pytest.raises(AuthenticationFailedError):
            await auth_service.login("admin@example.com", "adminpassword")
