# olimpiadas/repositories/profile_repo.py
import uuid
from collections.abc import Iterable

from sqlmodel import Session, select

from olimpiadas.models.profile import (
    Profile,
    ProfileType,
    RegistrationFee,
    RoleAssignment,
)


class ProfileRepository:
    """
    Data access layer for profiles, registration fees and role assignments.

    NOTE:
      - No commits here; role changes are always part of a larger
        transaction owned by a service.
    """

    # ---- Profiles ----

    def get_for_event_by_code(
        self,
        session: Session,
        event_id: uuid.UUID,
        code: str,
    ) -> Profile | None:
        stmt = (
            select(Profile)
            .join(ProfileType, ProfileType.id == Profile.profile_type_id)
            .where(Profile.event_id == event_id, ProfileType.code == code)
        )
        return session.exec(stmt).first()

    def list_for_event_with_codes(
        self,
        session: Session,
        event_id: uuid.UUID,
        profile_ids: Iterable[int],
    ) -> list[tuple[Profile, str]]:
        ids = list(profile_ids)
        if not ids:
            return []
        stmt = (
            select(Profile, ProfileType.code)
            .join(ProfileType, ProfileType.id == Profile.profile_type_id)
            .where(Profile.event_id == event_id, Profile.id.in_(ids))
        )
        return session.exec(stmt).all()

    # ---- Fees ----

    def get_fee(
        self,
        session: Session,
        event_id: uuid.UUID,
        profile_id: int,
    ) -> RegistrationFee | None:
        stmt = select(RegistrationFee).where(
            RegistrationFee.event_id == event_id,
            RegistrationFee.profile_id == profile_id,
        )
        return session.exec(stmt).first()

    # ---- Role assignments ----

    def list_assignments(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> list[tuple[RoleAssignment, str]]:
        """Current (assignment, profile type code) pairs for the user in the event."""
        stmt = (
            select(RoleAssignment, ProfileType.code)
            .join(Profile, Profile.id == RoleAssignment.profile_id)
            .join(ProfileType, ProfileType.id == Profile.profile_type_id)
            .where(
                RoleAssignment.user_id == user_id,
                RoleAssignment.event_id == event_id,
            )
        )
        return session.exec(stmt).all()

    def list_role_codes(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> list[str]:
        stmt = (
            select(ProfileType.code)
            .join(Profile, Profile.profile_type_id == ProfileType.id)
            .join(RoleAssignment, RoleAssignment.profile_id == Profile.id)
            .where(
                RoleAssignment.user_id == user_id,
                RoleAssignment.event_id == event_id,
            )
            .distinct()
        )
        return sorted(session.exec(stmt).all())

    def add_assignment(
        self, session: Session, assignment: RoleAssignment
    ) -> RoleAssignment:
        session.add(assignment)
        session.flush()
        return assignment

    def delete_assignment(self, session: Session, assignment: RoleAssignment) -> None:
        session.delete(assignment)
        session.flush()
