# olimpiadas/services/user_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from olimpiadas.core.auth import AuthClaims
from olimpiadas.core.navigation import resolve_navigation
from olimpiadas.models.user import User
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.user import (
    NavigationItemRead,
    NavigationRead,
    UserCreate,
    UserRead,
    UserUpdate,
)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - enforce app rules (no email / document change, one profile per account)
      - orchestrate repository operations
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository, profile_repo: ProfileRepository):
        self.repo = repo
        self.profile_repo = profile_repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> UserRead:
        """Return the current authenticated user."""
        return UserRead.from_model(current_user)

    def create_me(
        self,
        session: Session,
        claims: AuthClaims,
        payload: UserCreate,
    ) -> UserRead:
        """
        First-time profile completion after Supabase sign-up.

        Rules:
          - id and email come from the token
          - one profile per account (409 if it already exists)
          - the email cannot belong to another profile
        """
        if self.repo.get_by_id(session, claims.user_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Profile already exists",
            )
        if self.repo.get_by_email(session, claims.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        user = User(
            id=claims.user_id,
            email=claims.email,
            full_name=payload.full_name,
            phone=payload.phone,
            document_type=payload.document_type,
            document_number=payload.document_number,
            gender=payload.gender,
            birth_date=payload.birth_date,
            branch_id=payload.branch_id,
        )
        return UserRead.from_model(self.repo.create(session, user))

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> UserRead:
        """Partial update for profile edits."""
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(current_user, field, value)

        return UserRead.from_model(self.repo.update(session, current_user))

    def list_dependents(self, session: Session, guardian: User) -> list[UserRead]:
        """Children registered by `guardian`."""
        return [
            UserRead.from_model(u)
            for u in self.repo.list_dependents(session, guardian.id)
        ]

    # ----- Navigation -----

    def get_navigation(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> NavigationRead:
        """Menu entries and landing route for the user's roles in the event."""
        codes = self.profile_repo.list_role_codes(session, user_id, event_id)
        result = resolve_navigation(codes)
        return NavigationRead(
            role_codes=codes,
            items=[
                NavigationItemRead(
                    label=item.label, path=item.path, roles=sorted(item.roles)
                )
                for item in result.items
            ],
            redirect=result.redirect,
        )
