"""Integration tests for PostgresUserRepository.

These tests run against the database configured by DATABASE__URL and are
skipped when it cannot be reached.
"""

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from passage.domain.error import DuplicateUsernameError
from passage.domain.repository import UserRepository
from passage.domain.value import ProviderIdentityQuery
from passage.persistence.repository import PostgresUserRepository
from passage.persistence.tables import metadata, users_table
from tests.conftest import make_user
from tests.di import build_test_container


@pytest_asyncio.fixture
async def integration_env():
    """Request container on real PostgreSQL with an empty users table."""
    container = build_test_container(unmock={"persistence"})
    engine = await container.get(AsyncEngine)

    try:
        async with engine.begin() as conn:
            await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))
            await conn.run_sync(metadata.create_all)
            await conn.execute(users_table.delete())
    except (OSError, SQLAlchemyError) as e:
        await container.close()
        pytest.skip(f"PostgreSQL not available: {e}")

    async with container() as request_container:
        yield request_container

    async with engine.begin() as conn:
        await conn.execute(users_table.delete())
    await container.close()


def github_identity(identifier) -> ProviderIdentityQuery:
    return ProviderIdentityQuery(
        provider="github", identifier_field="id", identifier=identifier
    )


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_container_provides_postgres_repository(self, integration_env):
        """Unmocked persistence should resolve to the PostgreSQL repository."""
        user_repo = await integration_env.get(UserRepository)

        assert isinstance(user_repo, PostgresUserRepository)

    @pytest.mark.asyncio
    async def test_save_and_find_round_trip(self, integration_env):
        """Saved users should be found by id, username and email."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        user = make_user(username="alice", email="alice@example.com")

        # Act
        await user_repo.save(user)

        # Assert
        assert (await user_repo.find_by_id(user.id)).username == "alice"
        assert (await user_repo.find_by_username("alice")).id == user.id
        assert (await user_repo.find_by_email("alice@example.com")).id == user.id

    @pytest.mark.asyncio
    async def test_find_by_primary_provider_identity(self, integration_env):
        """Primary provider and identifier should find the user."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        user = make_user(
            username="octocat",
            provider="github",
            provider_data={"id": 42, "login": "octocat"},
        )
        await user_repo.save(user)

        # Act
        found = await user_repo.find_by_provider_identity(github_identity(42))

        # Assert
        assert found is not None
        assert found.id == user.id
        assert found.provider_data == {"id": 42, "login": "octocat"}

    @pytest.mark.asyncio
    async def test_find_by_additional_provider_identity(self, integration_env):
        """Identity linked as an additional provider should find its owner."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        user = make_user(
            username="alice",
            provider="local",
            additional_providers_data={"github": {"id": 42}},
        )
        await user_repo.save(user)

        # Act
        found = await user_repo.find_by_provider_identity(github_identity(42))

        # Assert
        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_identifier_under_other_provider_does_not_match(
        self, integration_env
    ):
        """Same identifier under a different provider should not match."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(
            make_user(
                username="gitlab-user",
                provider="gitlab",
                provider_data={"id": 42},
                additional_providers_data={"bitbucket": {"id": 42}},
            )
        )

        # Act
        found = await user_repo.find_by_provider_identity(github_identity(42))

        # Assert
        assert found is None

    @pytest.mark.asyncio
    async def test_identifier_json_type_must_match(self, integration_env):
        """A numeric identifier should not match its string form."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(
            make_user(username="octocat", provider="github", provider_data={"id": 42})
        )

        # Act
        found = await user_repo.find_by_provider_identity(github_identity("42"))

        # Assert
        assert found is None

    @pytest.mark.asyncio
    async def test_save_updates_existing_user(self, integration_env):
        """Saving a changed user should update the stored row."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        user = make_user(username="alice")
        await user_repo.save(user)

        # Act
        await user_repo.save(user.with_linked_provider("github", {"id": 7}))

        # Assert
        stored = await user_repo.find_by_id(user.id)
        assert stored.additional_providers_data == {"github": {"id": 7}}

    @pytest.mark.asyncio
    async def test_duplicate_username_raises(self, integration_env):
        """Unique username violations should raise DuplicateUsernameError."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(make_user(username="alice"))

        # Act & Assert
        with pytest.raises(DuplicateUsernameError) as exc_info:
            await user_repo.save(make_user(username="alice"))

        assert exc_info.value.username == "alice"

    @pytest.mark.asyncio
    async def test_session_usable_after_duplicate_username(self, integration_env):
        """A failed write should not poison the request transaction."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.save(make_user(username="alice"))
        with pytest.raises(DuplicateUsernameError):
            await user_repo.save(make_user(username="alice"))

        # Act
        bob = await user_repo.save(make_user(username="bob"))

        # Assert
        assert (await user_repo.find_by_username("bob")).id == bob.id
