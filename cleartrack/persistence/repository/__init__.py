"""PostgreSQL repository implementations."""

from cleartrack.persistence.repository.application import (
    PostgresApplicationRepository,
)
from cleartrack.persistence.repository.client_request import (
    PostgresClientRequestRepository,
)
from cleartrack.persistence.repository.credential import (
    PostgresCredentialRepository,
)
from cleartrack.persistence.repository.invite import PostgresInviteRepository
from cleartrack.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCredentialRepository",
    "PostgresInviteRepository",
    "PostgresClientRequestRepository",
    "PostgresApplicationRepository",
]
