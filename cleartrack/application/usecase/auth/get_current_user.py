"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from cleartrack.domain.error import UnauthenticatedError
from cleartrack.domain.service import UserService
from cleartrack.domain.value import Caller, UserRole


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    caller: Caller | None = None


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    role: UserRole
    email: str | None
    first_name: str | None
    last_name: str | None
    practitioner_id: str | None  # Linked practitioner, clients only
    practitioner_code: str | None  # Practitioners only
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        if request.caller is None:
            raise UnauthenticatedError()

        user = await self.user_service.get_by_id(request.caller.user_id)
        return GetCurrentUserResponse(
            user_id=str(user.id),
            role=user.role,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            practitioner_id=str(user.practitioner_id) if user.practitioner_id else None,
            practitioner_code=(
                user.practitioner.practitioner_code if user.practitioner else None
            ),
            created_at=user.created_at,
        )
