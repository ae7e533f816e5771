"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from passage.config import DatabaseSettings, Settings
from passage.domain.repository import UserRepository
from passage.persistence.database import create_engine, create_session_factory
from passage.persistence.repository import PostgresUserRepository
from passage.util.di.base import ProviderBase
from passage.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """User store component."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """User store backed by PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(
        self, database: DatabaseSettings, settings: Settings
    ) -> AsyncIterator[AsyncEngine]:
        """Engine shared by all requests, disposed with the container."""
        engine = create_engine(database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request.

        Committed when the request scope closes normally, rolled back when it
        closes with an exception.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Rolling back request transaction", error=str(e))
                await session.rollback()
                raise
            await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)
