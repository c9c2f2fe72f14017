# olimpiadas/core/auth.py
import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from olimpiadas.core.config import get_settings
from olimpiadas.database import get_session
from olimpiadas.models.user import User
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header does not raise here,
#   so we can answer with our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()
profile_repo = ProfileRepository()


@dataclass(frozen=True)
class AuthClaims:
    """Identity taken from a verified Supabase access token."""

    user_id: uuid.UUID
    email: str


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthClaims:
    """
    Resolve the caller's identity from the bearer token.

    Does not require a profile row, so it can be used by the
    profile-completion endpoint right after sign-up.

    Raises:
        HTTPException(401): missing token, or token missing sub/email.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    # Supabase provides sub as a string; enforce UUID
    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    return AuthClaims(user_id=sub_uuid, email=email)


def require_auth(
    claims: AuthClaims = Depends(get_token_claims),
    session: Session = Depends(get_session),
) -> User:
    """
    Enforce authentication with a completed profile.

    Returns:
        The authenticated User.

    Raises:
        HTTPException(403): if the profile was never completed.
    """
    user = user_repo.get_by_id(session, claims.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profile not completed",
        )
    return user


def require_event_roles(*codes: str):
    """
    Build a dependency that lets through users holding any of `codes`
    in the event named by the `event_id` path parameter.

    Usage:

        @router.get(
            "/{event_id}/users",
            dependencies=[Depends(require_event_roles("ADM"))],
        )
    """
    allowed = frozenset(codes)

    def dependency(
        event_id: uuid.UUID,
        user: User = Depends(require_auth),
        session: Session = Depends(get_session),
    ) -> User:
        held = set(profile_repo.list_role_codes(session, user.id, event_id))
        if not held & allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this event",
            )
        return user

    return dependency
