"""Client request routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from cleartrack.application.usecase.request import (
    CreateClientRequestRequest,
    CreateClientRequestResponse,
    CreateClientRequestUseCase,
    ListAssignedRequestsRequest,
    ListAssignedRequestsResponse,
    ListAssignedRequestsUseCase,
    ListMyRequestsRequest,
    ListMyRequestsResponse,
    ListMyRequestsUseCase,
    RespondToClientRequestRequest,
    RespondToClientRequestResponse,
    RespondToClientRequestUseCase,
)
from cleartrack.domain.service import JWTService
from cleartrack.domain.value import RequestStatus

router = APIRouter(prefix="/requests", tags=["requests"], route_class=DishkaRoute)


class CreateClientRequestAPIRequest(BaseModel):
    needs: list[str] = []
    message: str | None = None


class RespondAPIRequest(BaseModel):
    action: str  # "accept" or "decline"


@router.post(
    "", response_model=CreateClientRequestResponse, status_code=status.HTTP_201_CREATED
)
async def create_client_request(
    request: CreateClientRequestAPIRequest,
    use_case: FromDishka[CreateClientRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateClientRequestResponse:
    """Raise a request and assign it to the next practitioner in rotation.

    Example:
        POST /requests
        {"needs": ["tax", "bookkeeping"], "message": "Year-end help"}
    """
    return await use_case.execute(
        CreateClientRequestRequest(
            caller=jwt_service.get_caller(auth_token),
            needs=request.needs,
            message=request.message,
        )
    )


@router.get("/assigned", response_model=ListAssignedRequestsResponse)
async def list_assigned_requests(
    use_case: FromDishka[ListAssignedRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
) -> ListAssignedRequestsResponse:
    return await use_case.execute(
        ListAssignedRequestsRequest(
            caller=jwt_service.get_caller(auth_token), status=status_filter
        )
    )


@router.get("/mine", response_model=ListMyRequestsResponse)
async def list_my_requests(
    use_case: FromDishka[ListMyRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListMyRequestsResponse:
    """Requests raised by the caller, newest first."""
    return await use_case.execute(
        ListMyRequestsRequest(caller=jwt_service.get_caller(auth_token))
    )

@router.post("/{request_id}/respond", response_model=RespondToClientRequestResponse)
async def respond_to_client_request(
    request_id: str,
    request: RespondAPIRequest,
    use_case: FromDishka[RespondToClientRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RespondToClientRequestResponse:
    """Accept or decline a request assigned to the caller."""
    return await use_case.execute(
        RespondToClientRequestRequest(
            caller=jwt_service.get_caller(auth_token),
            request_id=request_id,
            action=request.action,
        )
    )
