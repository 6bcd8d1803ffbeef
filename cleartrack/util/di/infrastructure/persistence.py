"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cleartrack.config import Settings
from cleartrack.domain.repository import (
    ApplicationRepository,
    ClientRequestRepository,
    CredentialRepository,
    InviteRepository,
    UserRepository,
)
from cleartrack.persistence.database import (
    create_engine,
    create_session_factory,
    request_transaction,
)
from cleartrack.persistence.repository import (
    PostgresApplicationRepository,
    PostgresClientRequestRepository,
    PostgresCredentialRepository,
    PostgresInviteRepository,
    PostgresUserRepository,
)
from cleartrack.util.di.base import ProviderBase
from cleartrack.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed on shutdown."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request transaction shared by every repository."""
        async with request_transaction(session_factory) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_credential_repository(self, session: AsyncSession) -> CredentialRepository:
        """Provide Credential repository."""
        return PostgresCredentialRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_client_request_repository(
        self, session: AsyncSession
    ) -> ClientRequestRepository:
        """Provide ClientRequest repository."""
        return PostgresClientRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_application_repository(
        self, session: AsyncSession
    ) -> ApplicationRepository:
        """Provide PractitionerApplication repository."""
        return PostgresApplicationRepository(session)
