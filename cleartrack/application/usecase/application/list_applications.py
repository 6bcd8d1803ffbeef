"""List practitioner applications use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from cleartrack.application.usecase.base import BaseUseCase
from cleartrack.domain.service import ApplicationService, UserService
from cleartrack.domain.value import ApplicationStatus, Caller, UserRole


class ListApplicationsRequest(BaseModel):
    caller: Caller | None = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ApplicationItem(BaseModel):
    application_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    practice_name: str
    years_experience: float
    specializations: list[str]
    status: ApplicationStatus
    created_at: datetime


class ListApplicationsResponse(BaseModel):
    items: list[ApplicationItem]


class ListApplicationsUseCase(BaseUseCase):
    """Use case for the admin review queue."""

    def __init__(
        self, application_service: ApplicationService, user_service: UserService
    ) -> None:
        self.application_service = application_service
        self.user_service = user_service

    async def execute(
        self, request: ListApplicationsRequest
    ) -> ListApplicationsResponse:
        await self.user_service.require_role(request.caller, UserRole.ADMIN)

        applications = await self.application_service.list_by_status(
            request.status, request.limit, request.offset
        )
        return ListApplicationsResponse(
            items=[
                ApplicationItem(
                    application_id=str(a.id),
                    first_name=a.first_name,
                    last_name=a.last_name,
                    email=a.email,
                    phone=a.phone,
                    practice_name=a.practice_name,
                    years_experience=a.years_experience,
                    specializations=sorted(a.specializations),
                    status=a.status,
                    created_at=a.created_at,
                )
                for a in applications
            ]
        )
