"""Salted PBKDF2-SHA256 password hashing for admin accounts.

Hashes are stored as ``"<salt hex>:<digest hex>"``.
"""

import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password with a random (or supplied) salt.

    Args:
        password: Plain-text password
        salt: Optional hex salt, generated when omitted

    Returns:
        str: Encoded ``salt:digest`` string
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt), PBKDF2_ITERATIONS
    ).hex()
    return f"{salt}:{digest}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time.

    Returns:
        bool: True if the password matches, False otherwise (including a
        malformed stored hash)
    """
    salt, sep, stored = password_hash.partition(":")
    if not sep:
        return False

    try:
        salt_bytes = bytes.fromhex(salt)
    except ValueError:
        return False

    check = hashlib.pbkdf2_hmac("sha256", password.encode(), salt_bytes, PBKDF2_ITERATIONS).hex()
    return hmac.compare_digest(check, stored)
