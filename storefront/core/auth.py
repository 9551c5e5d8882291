# storefront/core/auth.py
import uuid
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.errors import ProfileConflict
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository

settings = get_settings()

# auto_error=False: a missing header falls through to the cookie, then to guest
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a Supabase access token and return its claims.

    Signature and `exp` are checked; `aud` is not (Supabase sets it per
    project and client).

    Raises:
        HTTPException(401): bad signature, malformed or expired token.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise _unauthorized("Invalid or expired token")


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Bearer header wins; otherwise the auth cookie (browser clients)."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the shopper behind the request, or None for guests.

    A valid token for an identity we have never seen provisions a profile
    on the spot, so sign-up needs no extra call from the client.

    Raises:
        HTTPException(401): token present but unusable.
        HTTPException(409): the token's email belongs to another profile.
    """
    token = _extract_token(request, credentials)
    if not token:
        return None

    claims = decode_access_token(token)
    sub = claims.get("sub")
    email = claims.get("email")
    if not sub or not email:
        raise _unauthorized("Token missing sub/email")

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise _unauthorized("Invalid sub in token")

    try:
        return user_repo.provision(session, user_id, email)
    except ProfileConflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    if user is None:
        raise _unauthorized("Authentication required")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
