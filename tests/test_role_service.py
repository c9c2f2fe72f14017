import uuid

import pytest

from olimpiadas.core.errors import (
    ExclusiveProfileConflictError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from olimpiadas.models.event import Event
from olimpiadas.models.profile import Profile
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.services.role_service import RoleService


@pytest.fixture
def service():
    return RoleService(ProfileRepository(), UserRepository())


class TestAssignUserProfiles:
    def test_replaces_profile_set(self, session, service, user, event, profiles, grant):
        grant(user, profiles["PGR"])
        grant(user, profiles["JUZ"])

        codes = service.assign_user_profiles(
            session,
            user.id,
            event.id,
            [profiles["ATL"].id, profiles["ORE"].id],
        )

        assert codes == ["ATL", "ORE"]

    def test_empty_list_removes_everything(
        self, session, service, user, event, profiles, grant
    ):
        grant(user, profiles["ADM"])

        assert service.assign_user_profiles(session, user.id, event.id, []) == []

    def test_both_exclusive_profiles_rejected(
        self, session, service, user, event, profiles, grant
    ):
        grant(user, profiles["JUZ"])

        with pytest.raises(ExclusiveProfileConflictError) as exc:
            service.assign_user_profiles(
                session,
                user.id,
                event.id,
                [profiles["ATL"].id, profiles["PGR"].id],
            )
        assert exc.value.status_code == 400
        assert service.list_role_codes(session, user.id, event.id) == ["JUZ"]

    def test_profile_from_another_event(self, session, service, user, event, profiles):
        today = event.registration_start
        other = Event(
            name="Outra edição", registration_start=today, registration_end=today
        )
        session.add(other)
        session.flush()
        foreign = Profile(
            event_id=other.id,
            profile_type_id=profiles["ATL"].profile_type_id,
            name="Atleta",
        )
        session.add(foreign)
        session.commit()

        with pytest.raises(ProfileNotFoundError):
            service.assign_user_profiles(session, user.id, event.id, [foreign.id])

    def test_unknown_user(self, session, service, event, profiles):
        with pytest.raises(UserNotFoundError):
            service.assign_user_profiles(
                session, uuid.uuid4(), event.id, [profiles["ATL"].id]
            )


def test_assign_exclusive_profile_is_idempotent(
    session, service, user, event, profiles
):
    service.assign_exclusive_profile(session, user.id, event.id, profiles["ATL"].id)
    service.assign_exclusive_profile(session, user.id, event.id, profiles["ATL"].id)
    session.commit()

    assert service.list_role_codes(session, user.id, event.id) == ["ATL"]


def test_grant_profiles_skips_existing(session, service, user, event, profiles, grant):
    grant(user, profiles["DEP"])

    service.grant_profiles(
        session, user.id, event.id, [profiles["DEP"].id, profiles["C-6"].id]
    )
    session.commit()

    assert service.list_role_codes(session, user.id, event.id) == ["C-6", "DEP"]


def test_list_event_users_groups_profiles(
    session, service, user, event, profiles, grant, make_user
):
    other = make_user("ana@example.com", full_name="Ana Souza")
    grant(user, profiles["ATL"])
    grant(user, profiles["ORE"])
    grant(other, profiles["PGR"])

    users = service.list_event_users(session, event.id)

    assert [u.full_name for u in users] == ["Ana Souza", "Maria Silva"]
    assert [p.code for p in users[0].profiles] == ["PGR"]
    assert sorted(p.code for p in users[1].profiles) == ["ATL", "ORE"]
