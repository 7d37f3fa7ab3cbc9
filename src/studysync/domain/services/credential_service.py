"""Credential store: user registration and password authentication."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.core.logging import get_logger
from studysync.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)
from studysync.domain.services.identifiers import new_id
from studysync.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)
from studysync.infrastructure.persistence.models import UserModel
from studysync.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address."""
    return email.strip().lower()


class CredentialService:
    """Registers users and checks their passwords.

    Passwords are only ever persisted as salted Argon2 hashes.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserRepository(session)

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> UserModel:
        """Create a new user.

        Args:
            username: Unique username (surrounding whitespace is trimmed).
            email: Unique email; compared and stored lower-cased.
            password: Plaintext password, hashed before persistence.
            full_name: Optional full name.

        Returns:
            The created user.

        Raises:
            ValidationError: If a required field is empty.
            ConflictError: If the username or email is already taken.
        """
        username = username.strip()
        email = normalize_email(email)
        if not username or not email or not password:
            raise ValidationError(
                "Please enter all required fields (username, email, password)."
            )

        existing = await self.user_repo.find_by_username_or_email(username, email)
        if existing is not None:
            field = "username" if existing.username == username else "email"
            logger.info("Registration failed: duplicate user", field=field)
            raise ConflictError(
                "User with that username or email already exists.", field=field
            )

        user = UserModel(
            id=new_id(),
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name.strip() if full_name and full_name.strip() else None,
        )
        try:
            await self.user_repo.create(user)
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Registration failed: uniqueness violation on write")
            raise ConflictError("Username or Email already in use.") from e

        logger.info("User registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, email: str, password: str) -> UserModel:
        """Check an email/password pair.

        Unknown emails and wrong passwords fail identically, and an unknown
        email still pays for one hash verification.

        Raises:
            ValidationError: If either field is empty.
            InvalidCredentialsError: If the credentials do not match a user.
        """
        if not email or not password:
            raise ValidationError("Please enter email and password.")

        user = await self.user_repo.get_by_email(normalize_email(email))
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            raise InvalidCredentialsError()

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.user_repo.update(user)
            logger.info("Password hash upgraded", user_id=user.id)

        logger.info("User authenticated", user_id=user.id)
        return user

    async def get_user(self, user_id: str) -> UserModel | None:
        """Look up a user by id."""
        return await self.user_repo.get_by_id(user_id)
