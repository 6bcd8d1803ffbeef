"""Client invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from cleartrack.application.usecase.invite import (
    CreateClientInviteRequest,
    CreateClientInviteResponse,
    CreateClientInviteUseCase,
    ListClientInvitesRequest,
    ListClientInvitesResponse,
    ListClientInvitesUseCase,
    VerifyClientInviteRequest,
    VerifyClientInviteResponse,
    VerifyClientInviteUseCase,
)
from cleartrack.domain.service import JWTService
from cleartrack.domain.value import InviteStatus

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class CreateClientInviteAPIRequest(BaseModel):
    """API request for inviting a client."""

    mobile: str | None = None
    client_name: str | None = None
    note: str | None = None


class VerifyClientInviteAPIRequest(BaseModel):
    """API request for redeeming a client invite.

    Code entry sends ``mobile``; invite links send ``invite_id``.
    """

    code: str
    mobile: str | None = None
    invite_id: str | None = None


@router.post(
    "/client",
    response_model=CreateClientInviteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_client_invite(
    request: CreateClientInviteAPIRequest,
    use_case: FromDishka[CreateClientInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateClientInviteResponse:
    """Invite a client and text them the code.

    Example:
        POST /invites/client
        {"mobile": "+27821234567", "client_name": "Thabo"}
    """
    return await use_case.execute(
        CreateClientInviteRequest(
            caller=jwt_service.get_caller(auth_token),
            mobile=request.mobile,
            client_name=request.client_name,
            note=request.note,
        )
    )


@router.get("/client", response_model=ListClientInvitesResponse)
async def list_client_invites(
    use_case: FromDishka[ListClientInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InviteStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListClientInvitesResponse:
    """List client invites issued by the calling practitioner, newest first."""
    return await use_case.execute(
        ListClientInvitesRequest(
            caller=jwt_service.get_caller(auth_token),
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )


@router.post("/client/verify", response_model=VerifyClientInviteResponse)
async def verify_client_invite(
    request: VerifyClientInviteAPIRequest,
    use_case: FromDishka[VerifyClientInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VerifyClientInviteResponse:
    """Redeem a client invite and link the caller to the practitioner."""
    return await use_case.execute(
        VerifyClientInviteRequest(
            caller=jwt_service.get_caller(auth_token),
            code=request.code,
            mobile=request.mobile,
            invite_id=request.invite_id,
        )
    )
