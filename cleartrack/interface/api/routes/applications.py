"""Practitioner application routes."""

import hmac

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status

from cleartrack.application.usecase.application import (
    ApplicationUpdatedEvent,
    ApplicationUpdatedResult,
    ApproveApplicationRequest,
    ApproveApplicationResponse,
    ApproveApplicationUseCase,
    ListApplicationsRequest,
    ListApplicationsResponse,
    ListApplicationsUseCase,
    OnApplicationUpdatedUseCase,
    SubmitApplicationRequest,
    SubmitApplicationResponse,
    SubmitApplicationUseCase,
)
from cleartrack.config import Settings
from cleartrack.domain.error import UnauthenticatedError
from cleartrack.domain.service import JWTService
from cleartrack.domain.value import ApplicationStatus

router = APIRouter(
    prefix="/applications", tags=["applications"], route_class=DishkaRoute
)


@router.post(
    "", response_model=SubmitApplicationResponse, status_code=status.HTTP_201_CREATED
)
async def submit_application(
    request: SubmitApplicationRequest,
    use_case: FromDishka[SubmitApplicationUseCase],
) -> SubmitApplicationResponse:
    """Apply to join as a practitioner. No account needed."""
    return await use_case.execute(request)


@router.get("", response_model=ListApplicationsResponse)
async def list_applications(
    use_case: FromDishka[ListApplicationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: ApplicationStatus = Query(
        default=ApplicationStatus.PENDING, alias="status"
    ),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListApplicationsResponse:
    """Admin review queue, oldest first."""
    return await use_case.execute(
        ListApplicationsRequest(
            caller=jwt_service.get_caller(auth_token),
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )


@router.post("/events/updated", response_model=ApplicationUpdatedResult)
async def application_updated(
    event: ApplicationUpdatedEvent,
    use_case: FromDishka[OnApplicationUpdatedUseCase],
    settings: FromDishka[Settings],
    x_events_secret: str | None = Header(default=None),
) -> ApplicationUpdatedResult:
    """Deliver an application change event.

    Deliveries may repeat; the welcome email is still sent at most once.
    Requires the shared secret in the ``X-Events-Secret`` header.
    """
    if not x_events_secret or not hmac.compare_digest(
        x_events_secret.encode(), settings.auth.events_secret.encode()
    ):
        raise UnauthenticatedError("Invalid events secret")
    return await use_case.execute(event)


@router.post("/{application_id}/approve", response_model=ApproveApplicationResponse)
async def approve_application(
    application_id: str,
    use_case: FromDishka[ApproveApplicationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ApproveApplicationResponse:
    """Approve a pending application and email the registration link."""
    return await use_case.execute(
        ApproveApplicationRequest(
            caller=jwt_service.get_caller(auth_token),
            application_id=application_id,
        )
    )
