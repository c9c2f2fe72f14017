# olimpiadas/services/role_service.py
import logging
import uuid
from collections.abc import Iterable

from sqlmodel import Session

from olimpiadas.core.errors import (
    ExclusiveProfileConflictError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from olimpiadas.models.profile import EXCLUSIVE_PROFILE_CODES, RoleAssignment
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.role import EventUserRead, ProfileRead

logger = logging.getLogger(__name__)


class RoleService:
    """
    Per-event role assignment.

    Every change is computed from the current assignments and written in
    the caller's transaction, so a user never ends up holding both
    Atleta and Público Geral in the same event.
    """

    def __init__(self, profile_repo: ProfileRepository, user_repo: UserRepository):
        self.profile_repo = profile_repo
        self.user_repo = user_repo

    def list_role_codes(
        self, session: Session, user_id: uuid.UUID, event_id: uuid.UUID
    ) -> list[str]:
        return self.profile_repo.list_role_codes(session, user_id, event_id)

    def assign_exclusive_profile(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
        profile_id: int,
    ) -> None:
        """
        Give `profile_id` to the user and drop any other exclusive profile
        they hold in the event. Does not commit.
        """
        has_target = False
        for assignment, code in self.profile_repo.list_assignments(
            session, user_id, event_id
        ):
            if assignment.profile_id == profile_id:
                has_target = True
            elif code in EXCLUSIVE_PROFILE_CODES:
                logger.info(
                    "Removing exclusive profile %s from user %s",
                    assignment.profile_id,
                    user_id,
                )
                self.profile_repo.delete_assignment(session, assignment)

        if not has_target:
            self.profile_repo.add_assignment(
                session,
                RoleAssignment(
                    user_id=user_id, profile_id=profile_id, event_id=event_id
                ),
            )

    def grant_profiles(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
        profile_ids: Iterable[int],
    ) -> None:
        """Add the missing assignments among `profile_ids`. Does not commit."""
        current = {
            a.profile_id
            for a, _ in self.profile_repo.list_assignments(session, user_id, event_id)
        }
        for profile_id in profile_ids:
            if profile_id not in current:
                self.profile_repo.add_assignment(
                    session,
                    RoleAssignment(
                        user_id=user_id, profile_id=profile_id, event_id=event_id
                    ),
                )
                current.add(profile_id)

    def assign_user_profiles(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
        profile_ids: list[int],
    ) -> list[str]:
        """
        Replace the user's whole profile set for the event (admin).

        Steps (single commit):
          1. Check the user exists.
          2. Check every profile belongs to the event.
          3. Reject more than one exclusive profile.
          4. Delete assignments not in the target set, insert the new ones.

        Returns:
            The user's role codes after the change.
        """
        if not self.user_repo.get_by_id(session, user_id):
            raise UserNotFoundError()

        target_ids = set(profile_ids)
        profiles = self.profile_repo.list_for_event_with_codes(
            session, event_id, target_ids
        )
        if len(profiles) != len(target_ids):
            raise ProfileNotFoundError("One or more profiles do not belong to this event")

        if sum(1 for _, code in profiles if code in EXCLUSIVE_PROFILE_CODES) > 1:
            raise ExclusiveProfileConflictError()

        current_ids: set[int] = set()
        for assignment, _ in self.profile_repo.list_assignments(
            session, user_id, event_id
        ):
            current_ids.add(assignment.profile_id)
            if assignment.profile_id not in target_ids:
                self.profile_repo.delete_assignment(session, assignment)

        for profile_id in sorted(target_ids - current_ids):
            self.profile_repo.add_assignment(
                session,
                RoleAssignment(
                    user_id=user_id, profile_id=profile_id, event_id=event_id
                ),
            )

        session.commit()
        codes = self.list_role_codes(session, user_id, event_id)
        logger.info("User %s profiles in event %s: %s", user_id, event_id, codes)
        return codes

    def list_event_users(
        self, session: Session, event_id: uuid.UUID
    ) -> list[EventUserRead]:
        """Users holding at least one profile in the event, with their profiles."""
        users: dict[uuid.UUID, EventUserRead] = {}
        for user, profile, code in self.user_repo.list_with_profiles_for_event(
            session, event_id
        ):
            entry = users.get(user.id)
            if entry is None:
                entry = EventUserRead(
                    id=user.id,
                    full_name=user.full_name,
                    email=user.email,
                    branch_id=user.branch_id,
                    profiles=[],
                )
                users[user.id] = entry
            entry.profiles.append(ProfileRead(id=profile.id, name=profile.name, code=code))
        return list(users.values())
