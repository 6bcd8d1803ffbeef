"""User profile domain service."""

import logfire

from cleartrack.domain.error import (
    NotFoundError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from cleartrack.domain.model import User
from cleartrack.domain.model.common import utcnow
from cleartrack.domain.repository import UserRepository
from cleartrack.domain.value import Caller, UserId, UserRole

_ROLE_DENIED_MESSAGES = {
    UserRole.PRACTITIONER: "Only practitioners can perform this action",
    UserRole.ADMIN: "Only administrators can perform this action",
}


class UserService:
    """Domain service for profile lookups, role checks and client linking."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id), "User profile not found")
            return user

    async def find_by_email(self, email: str) -> User | None:
        """Find a profile by email, None if absent."""
        return await self.user_repository.find_by_email(email.strip().lower())

    async def require_role(self, caller: Caller | None, role: UserRole) -> User:
        """Load the caller's profile and check it holds ``role``.

        Args:
            caller: Verified caller, None for anonymous requests
            role: Required role

        Returns:
            The caller's profile

        Raises:
            UnauthenticatedError: If there is no caller
            NotFoundError: If the caller has no profile
            PermissionDeniedError: If the profile holds another role
        """
        if caller is None:
            raise UnauthenticatedError()

        with logfire.span(
            "user_service.require_role", user_id=str(caller.user_id), role=role.value
        ):
            user = await self.get_by_id(caller.user_id)
            if user.role != role:
                logfire.warn(
                    "Role check failed",
                    user_id=str(caller.user_id),
                    required=role.value,
                    actual=user.role.value,
                )
                raise PermissionDeniedError(
                    _ROLE_DENIED_MESSAGES.get(role, "Permission denied")
                )
            return user

    async def list_practitioners(self) -> list[User]:
        """All practitioner profiles, unordered."""
        return await self.user_repository.find_by_role(UserRole.PRACTITIONER)

    async def ensure_client(self, user_id: UserId) -> User:
        """Upsert a profile with the client role.

        Existing clients are returned unchanged; any other profile keeps its
        role so that practitioners and admins can also raise requests.
        """
        with logfire.span("user_service.ensure_client", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is not None:
                return user
            user = await self.user_repository.save(
                User(id=user_id, role=UserRole.CLIENT)
            )
            logfire.info("Client profile created", user_id=str(user_id))
            return user

    async def link_client_to_practitioner(
        self, client_id: UserId, practitioner_id: UserId
    ) -> User:
        """Link a client profile to a practitioner (idempotent upsert).

        Args:
            client_id: Client user ID
            practitioner_id: Practitioner to link to

        Returns:
            Updated client profile
        """
        with logfire.span(
            "user_service.link_client_to_practitioner",
            client_id=str(client_id),
            practitioner_id=str(practitioner_id),
        ):
            user = await self.user_repository.find_by_id(client_id)
            if user is None:
                user = User(id=client_id, role=UserRole.CLIENT)
            elif user.practitioner_id == practitioner_id:
                return user

            linked = user.model_copy(
                update={"practitioner_id": practitioner_id, "updated_at": utcnow()}
            )
            saved = await self.user_repository.save(linked)
            logfire.info(
                "Client linked to practitioner",
                client_id=str(client_id),
                practitioner_id=str(practitioner_id),
            )
            return saved

    async def save(self, user: User) -> User:
        """Save a user profile."""
        return await self.user_repository.save(user)
