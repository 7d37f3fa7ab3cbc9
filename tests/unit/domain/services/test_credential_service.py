"""Unit tests for CredentialService."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)
from studysync.domain.services import CredentialService
from studysync.infrastructure.auth import needs_rehash
from studysync.infrastructure.persistence.models import UserModel


async def _user_count(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(UserModel))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_register_normalizes_and_hashes(db_session: AsyncSession):
    service = CredentialService(db_session)

    user = await service.register("  alice ", "  Alice@Example.COM ", "secret123", "Alice A")

    assert user.username == "alice"
    assert user.email == "alice@example.com"
    assert user.full_name == "Alice A"
    assert user.password_hash != "secret123"
    assert user.password_hash.startswith("$argon2id$")


@pytest.mark.asyncio
async def test_register_duplicate_email_is_case_insensitive(db_session: AsyncSession):
    service = CredentialService(db_session)
    await service.register("alice", "alice@example.com", "secret123")

    with pytest.raises(ConflictError) as exc_info:
        await service.register("alice2", "ALICE@example.com", "secret123")

    assert exc_info.value.field == "email"
    assert await _user_count(db_session) == 1


@pytest.mark.asyncio
async def test_register_duplicate_username(db_session: AsyncSession):
    service = CredentialService(db_session)
    await service.register("alice", "alice@example.com", "secret123")

    with pytest.raises(ConflictError) as exc_info:
        await service.register("alice", "other@example.com", "secret123")

    assert exc_info.value.field == "username"
    assert await _user_count(db_session) == 1


@pytest.mark.asyncio
async def test_register_requires_fields(db_session: AsyncSession):
    service = CredentialService(db_session)
    with pytest.raises(ValidationError):
        await service.register("   ", "alice@example.com", "secret123")
    with pytest.raises(ValidationError):
        await service.register("alice", "alice@example.com", "")


@pytest.mark.asyncio
async def test_authenticate_success(db_session: AsyncSession):
    service = CredentialService(db_session)
    registered = await service.register("alice", "alice@example.com", "secret123")

    user = await service.authenticate("Alice@Example.com", "secret123")

    assert user.id == registered.id


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_fail_identically(db_session: AsyncSession):
    service = CredentialService(db_session)
    await service.register("alice", "alice@example.com", "secret123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await service.authenticate("alice@example.com", "wrong-password")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        await service.authenticate("nobody@example.com", "secret123")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.message == "Invalid email or password."


@pytest.mark.asyncio
async def test_authenticate_rehashes_outdated_hash(db_session: AsyncSession):
    from argon2 import PasswordHasher

    service = CredentialService(db_session)
    user = await service.register("alice", "alice@example.com", "secret123")
    weak_hash = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1).hash("secret123")
    user.password_hash = weak_hash
    await db_session.flush()

    user = await service.authenticate("alice@example.com", "secret123")

    assert user.password_hash != weak_hash
    assert needs_rehash(user.password_hash) is False


@pytest.mark.asyncio
async def test_get_user(db_session: AsyncSession):
    service = CredentialService(db_session)
    user = await service.register("alice", "alice@example.com", "secret123")

    assert (await service.get_user(user.id)).username == "alice"
    assert await service.get_user("00000000-0000-0000-0000-000000000000") is None
