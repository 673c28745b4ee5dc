"""Integration tests for UserRepositorySQLAlchemy on SQLite."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy import text

from tests.shared.factories import make_session, make_user
from warden.domain.user import (
    UserAlreadyExistsError,
    UserDeletionConflictError,
    UserRole,
    UserStatus,
)
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


@pytest.mark.integration
class TestUserRepositoryLookups:
    """Tests for saving and finding users."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, user_repo):
        """Can save and retrieve a user by ID."""
        user = make_user()

        await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert isinstance(found.id, UUID)
        assert found.email == user.email
        assert found.username == user.username
        assert found.password_hash == user.password_hash
        assert found.role == UserRole.USER
        assert found.status == UserStatus.DEACTIVATE
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "identifier",
        ["alice@example.com", "ALICE@example.com", "alice", "  alice  "],
    )
    async def test_find_by_identifier(self, user_repo, identifier):
        user = make_user()
        await user_repo.save(user)

        found = await user_repo.find_by_identifier(identifier)

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_username_lookup_is_case_sensitive(self, user_repo):
        await user_repo.save(make_user())

        assert await user_repo.find_by_identifier("ALICE") is None

    @pytest.mark.asyncio
    async def test_find_by_blank_identifier(self, user_repo):
        assert await user_repo.find_by_identifier("   ") is None

    @pytest.mark.asyncio
    async def test_exists_checks(self, user_repo):
        await user_repo.save(make_user())

        assert await user_repo.exists_by_email("Alice@Example.com")
        assert await user_repo.exists_by_username("alice")
        assert not await user_repo.exists_by_email("bob@example.com")
        assert not await user_repo.exists_by_username("bobby")

    @pytest.mark.asyncio
    async def test_save_updates_existing(self, user_repo):
        user = make_user()
        await user_repo.save(user)

        user.update_profile(name="Renamed")
        user.promote_to_admin()
        user.change_status(UserStatus.ACTIVATE)
        await user_repo.save(user)

        found = await user_repo.find_by_id(user.id)
        assert found.name == "Renamed"
        assert found.role == UserRole.ADMIN
        assert found.status == UserStatus.ACTIVATE

    @pytest.mark.asyncio
    async def test_list_all_and_count(self, user_repo):
        first = make_user()
        second = make_user(email="bob@example.com", username="bobby")
        await user_repo.save(first)
        await user_repo.save(second)

        users = await user_repo.list_all()

        assert {u.id for u in users} == {first.id, second.id}
        assert await user_repo.count() == 2


@pytest.mark.integration
class TestUserRepositoryUniqueness:
    """Tests for unique email and username."""

    @pytest.mark.asyncio
    async def test_duplicate_email(self, user_repo):
        await user_repo.save(make_user())

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await user_repo.save(make_user(username="someone_else"))

        assert exc_info.value.field == "email"
        assert exc_info.value.value == "alice@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_username(self, user_repo):
        await user_repo.save(make_user())

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await user_repo.save(make_user(email="other@example.com"))

        assert exc_info.value.field == "username"
        assert exc_info.value.value == "alice"


@pytest.mark.integration
class TestUserRepositoryDeletion:
    """Tests for soft and hard deletion."""

    @pytest.mark.asyncio
    async def test_soft_delete_hides_user(self, user_repo):
        user = make_user()
        await user_repo.save(user)

        assert await user_repo.soft_delete(user.id) is True

        assert await user_repo.find_by_id(user.id) is None
        assert await user_repo.find_by_identifier("alice") is None
        assert await user_repo.list_all() == []
        assert await user_repo.count() == 0

    @pytest.mark.asyncio
    async def test_soft_deleted_user_still_blocks_email_and_username(self, user_repo):
        user = make_user()
        await user_repo.save(user)
        await user_repo.soft_delete(user.id)

        assert await user_repo.exists_by_email(user.email)
        assert await user_repo.exists_by_username(user.username)

    @pytest.mark.asyncio
    async def test_soft_delete_twice(self, user_repo):
        user = make_user()
        await user_repo.save(user)
        await user_repo.soft_delete(user.id)

        assert await user_repo.soft_delete(user.id) is False

    @pytest.mark.asyncio
    async def test_soft_delete_unknown(self, user_repo):
        assert await user_repo.soft_delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_hard_delete(self, user_repo, db_session):
        user = make_user()
        await user_repo.save(user)

        assert await user_repo.hard_delete(user.id) is True

        assert await user_repo.find_by_id(user.id) is None
        assert not await user_repo.exists_by_email(user.email)

    @pytest.mark.asyncio
    async def test_hard_delete_unknown(self, user_repo):
        assert await user_repo.hard_delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_hard_delete_cascades_sessions(self, user_repo, db_session):
        user = make_user()
        await user_repo.save(user)
        session_repo = SessionRepositorySQLAlchemy(db_session)
        await session_repo.save(make_session(user_id=user.id, token="tok"))

        await user_repo.hard_delete(user.id)

        assert await session_repo.find_active(user.id, "tok") is None

    @pytest.mark.asyncio
    async def test_hard_delete_blocked_by_reference(self, user_repo, db_session):
        user = make_user()
        await user_repo.save(user)
        await db_session.execute(
            text(
                "CREATE TABLE audit_entries ("
                "id INTEGER PRIMARY KEY, "
                "user_id CHAR(32) NOT NULL REFERENCES users(id))",
            ),
        )
        await db_session.execute(
            text("INSERT INTO audit_entries (user_id) VALUES (:user_id)"),
            {"user_id": user.id.hex},
        )

        with pytest.raises(UserDeletionConflictError):
            await user_repo.hard_delete(user.id)
