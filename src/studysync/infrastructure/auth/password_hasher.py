"""Password hashing utility using Argon2.

Provides salted password hashing and verification using the Argon2id
algorithm. Every hash embeds its own random salt and cost parameters.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

_hasher = PasswordHasher()

# Verified against when a login names an unknown email, so that both
# failure paths do the same amount of work.
DUMMY_PASSWORD_HASH = _hasher.hash("studysync-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("secret123")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Args:
        password: The plaintext password to verify.
        hashed: The stored hash to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        _hasher.verify(hashed, password)
        return True
    except (VerifyMismatchError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a hash was produced with outdated parameters.

    Should be called after a successful verification; if True the
    password should be hashed again with the current parameters.
    """
    return _hasher.check_needs_rehash(hashed)
