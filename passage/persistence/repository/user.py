"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from passage.domain.error import DuplicateUsernameError, StoreError
from passage.domain.model import User
from passage.domain.repository import UserRepository
from passage.domain.value import ProviderIdentityQuery, UserId
from passage.persistence.mappers import row_to_user, user_to_dict
from passage.persistence.tables import users_table


def provider_identity_statement(query: ProviderIdentityQuery) -> Select:
    """SELECT for the user owning a provider identity.

    Compiles to `(provider = :p AND provider_data @> {field: value}) OR
    additional_providers_data @> {p: {field: value}}`, served by the GIN
    indexes on both JSONB columns.
    """
    identity = {query.identifier_field: query.identifier}
    return (
        select(users_table)
        .where(
            or_(
                and_(
                    users_table.c.provider == query.provider,
                    users_table.c.provider_data.contains(identity),
                ),
                users_table.c.additional_providers_data.contains(
                    {query.provider: identity}
                ),
            )
        )
        .limit(1)
    )


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    SQLAlchemy errors are translated into StoreError so callers never see
    driver exceptions.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, stmt) -> Optional[User]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(f"User query failed: {e}") from e
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._find_one(stmt)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""
        stmt = select(users_table).where(users_table.c.username == username)
        return await self._find_one(stmt)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        stmt = select(users_table).where(users_table.c.email == email)
        return await self._find_one(stmt)

    async def find_by_provider_identity(
        self, query: ProviderIdentityQuery
    ) -> Optional[User]:
        """Find the user owning a provider identity.

        Uses JSONB containment so the identifier matches with its JSON type
        (a numeric GitHub id never matches its string form).

        Args:
            query: Provider identity lookup

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(provider_identity_statement(query))

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            DuplicateUsernameError: If the username is taken by another user
            StoreError: If the database fails
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        try:
            # Savepoint keeps the request transaction usable after a failed write
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateUsernameError(user.username) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to save user: {e}") from e

        return user
