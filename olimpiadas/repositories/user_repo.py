# olimpiadas/repositories/user_repo.py
import uuid

from sqlmodel import Session, select

from olimpiadas.models.profile import Profile, ProfileType, RoleAssignment
from olimpiadas.models.user import Branch, User


class UserRepository:
    """
    Data access layer for User (and the Branch lookup it needs).

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def add(self, session: Session, user: User) -> User:
        """
        Insert a User without committing (part of a larger transaction).
        """
        session.add(user)
        session.flush()
        return user

    # ----- Queries -----

    def list_dependents(
        self, session: Session, guardian_id: uuid.UUID
    ) -> list[User]:
        stmt = (
            select(User)
            .where(User.registered_by_id == guardian_id)
            .order_by(User.full_name)
        )
        return session.exec(stmt).all()

    def list_with_profiles_for_event(
        self, session: Session, event_id: uuid.UUID
    ) -> list[tuple[User, Profile, str]]:
        """
        Every (user, profile, profile type code) triple assigned in the event,
        ordered by user name.
        """
        stmt = (
            select(User, Profile, ProfileType.code)
            .join(RoleAssignment, RoleAssignment.user_id == User.id)
            .join(Profile, Profile.id == RoleAssignment.profile_id)
            .join(ProfileType, ProfileType.id == Profile.profile_type_id)
            .where(RoleAssignment.event_id == event_id)
            .order_by(User.full_name, Profile.id)
        )
        return session.exec(stmt).all()

    def get_branch(self, session: Session, branch_id: uuid.UUID) -> Branch | None:
        return session.get(Branch, branch_id)
