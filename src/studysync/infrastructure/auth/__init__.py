"""Authentication infrastructure components.

Password hashing and JWT bearer-token services.
"""

from studysync.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from studysync.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "hash_password",
    "jwt_service",
    "needs_rehash",
    "verify_password",
]
