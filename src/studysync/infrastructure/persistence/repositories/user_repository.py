"""User repository for database operations."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID.

        Args:
            user_id: User ID (UUID string).

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email address.

        Emails are stored lower-cased, so callers should normalize first.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def find_by_username_or_email(self, username: str, email: str) -> UserModel | None:
        """Get the first user holding either the username or the email."""
        result = await self.session.execute(
            select(UserModel)
            .where(or_(UserModel.username == username, UserModel.email == email))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def update(self, user: UserModel) -> UserModel:
        """Flush pending changes to a user."""
        if user not in self.session:
            self.session.add(user)
        await self.session.flush()
        return user
