"""In-memory repository implementations for testing."""

from .application import InMemoryApplicationRepository
from .client_request import InMemoryClientRequestRepository
from .credential import InMemoryCredentialRepository
from .invite import InMemoryInviteRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryApplicationRepository",
    "InMemoryClientRequestRepository",
    "InMemoryCredentialRepository",
    "InMemoryInviteRepository",
    "InMemoryUserRepository",
]
