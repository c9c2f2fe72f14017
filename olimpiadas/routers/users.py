# olimpiadas/routers/users.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from olimpiadas.core.auth import AuthClaims, get_token_claims, require_auth
from olimpiadas.database import get_session
from olimpiadas.models.user import User
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.user import NavigationRead, UserCreate, UserRead, UserUpdate
from olimpiadas.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
profile_repo = ProfileRepository()
service = UserService(repo, profile_repo)


# -------- Self profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires valid Supabase JWT and a completed profile.
    """
    return service.get_me(current_user)


@router.post("/me", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_me(
    payload: UserCreate,
    session: Session = Depends(get_session),
    claims: AuthClaims = Depends(get_token_claims),
):
    """
    Complete the profile right after Supabase sign-up.

    - CPF numbers are checked (check digits) before anything is stored.
    """
    return service.create_me(session, claims, payload)


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """Partially update the authenticated user's profile."""
    return service.update_me(session, current_user, payload)


@router.get("/me/dependents", response_model=list[UserRead])
def list_my_dependents(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """List the dependents registered by the current user."""
    return service.list_dependents(session, current_user)


@router.get("/me/navigation", response_model=NavigationRead)
def read_my_navigation(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Menu entries and initial route for the user's roles in `event_id`.

    `redirect` is null when none of the user's roles has a landing page.
    """
    return service.get_navigation(session, current_user.id, event_id)
