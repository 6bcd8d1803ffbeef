"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from cleartrack.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginResponse,
    LoginUseCase,
    SignupRequest,
    SignupResponse,
    SignupUseCase,
)
from cleartrack.config import Settings
from cleartrack.domain.error import NotFoundError
from cleartrack.domain.service import JWTService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

AUTH_COOKIE = "auth_token"


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Current user if authenticated, without failing for anonymous callers."""

    authenticated: bool
    user: GetCurrentUserResponse | None = None


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token as an HTTP-only cookie.

    Production serves the app and API from different subdomains, so the
    cookie is cross-site there (samesite none, secure). Development is
    same-origin over plain HTTP.
    """
    is_production = settings.environment == "production"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        domain=settings.auth.cookie_domain if is_production else None,
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> LoginResponse:
    """Log in with email and password and set the auth cookie."""
    result = await login_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    logger.info("Login successful for user %s", result.user_id)
    return result


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignupRequest,
    response: Response,
    signup_use_case: FromDishka[SignupUseCase],
    settings: FromDishka[Settings],
) -> SignupResponse:
    """Create a client account and log it in."""
    result = await signup_use_case.execute(request)
    set_auth_cookie(response, result.token, settings)
    return result


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    # Same domain/path as when the cookie was set
    is_production = settings.environment == "production"
    response.delete_cookie(
        key=AUTH_COOKIE,
        domain=settings.auth.cookie_domain if is_production else None,
        path="/",
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call anonymously: an invalid token or a token for a user with no
    profile yields ``authenticated=false`` rather than an error.
    """
    caller = jwt_service.get_caller(auth_token)
    if caller is None:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(caller=caller)
        )
    except NotFoundError:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, user=user)
