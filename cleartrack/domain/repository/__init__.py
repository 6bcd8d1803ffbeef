"""Repository interfaces for ClearTrack domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from cleartrack.domain.repository.application import ApplicationRepository
from cleartrack.domain.repository.client_request import ClientRequestRepository
from cleartrack.domain.repository.credential import CredentialRepository
from cleartrack.domain.repository.invite import InviteRepository
from cleartrack.domain.repository.user import UserRepository

__all__ = [
    "ApplicationRepository",
    "ClientRequestRepository",
    "CredentialRepository",
    "InviteRepository",
    "UserRepository",
]
