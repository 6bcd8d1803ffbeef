"""Session token encoding.

Tokens use the registered claims ``sub``, ``iss``, ``iat`` and ``exp``; the
login email rides along so routes can build a caller without a lookup.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from cleartrack.config import AuthSettings

ISSUER = "cleartrack"


class TokenPayload(BaseModel):
    """Decoded session claims."""

    sub: str
    email: str | None = None
    iat: datetime
    exp: datetime

    @property
    def user_id(self) -> str:
        return self.sub


class JWTError(Exception):
    """Raised when a session token cannot be trusted."""


def create_token(user_id: str, email: str | None, settings: AuthSettings) -> str:
    """Sign a session token valid for ``settings.jwt_expiry_days``."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "email": email,
        "iss": ISSUER,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a session token, checking signature, issuer and expiry.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=ISSUER,
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload.model_validate(claims)
