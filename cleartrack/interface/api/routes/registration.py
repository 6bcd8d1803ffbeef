"""Practitioner registration routes.

Both routes are anonymous; the token and code from the registration email
are the credential.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from cleartrack.application.usecase.application import (
    CompleteRegistrationRequest,
    CompleteRegistrationResponse,
    CompleteRegistrationUseCase,
    VerifyPractitionerInviteRequest,
    VerifyPractitionerInviteResponse,
    VerifyPractitionerInviteUseCase,
)

router = APIRouter(
    prefix="/registration", tags=["registration"], route_class=DishkaRoute
)


@router.post("/verify", response_model=VerifyPractitionerInviteResponse)
async def verify_registration(
    request: VerifyPractitionerInviteRequest,
    use_case: FromDishka[VerifyPractitionerInviteUseCase],
) -> VerifyPractitionerInviteResponse:
    """Check a registration link and return the applicant's details."""
    return await use_case.execute(request)


@router.post(
    "/complete",
    response_model=CompleteRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def complete_registration(
    request: CompleteRegistrationRequest,
    use_case: FromDishka[CompleteRegistrationUseCase],
) -> CompleteRegistrationResponse:
    """Create the practitioner account from a registration link."""
    return await use_case.execute(request)
