# olimpiadas/routers/admin_users.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from olimpiadas.core.auth import require_event_roles
from olimpiadas.database import get_session
from olimpiadas.models.profile import ADMIN
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.role import EventUserRead, UserProfilesRead, UserProfilesUpdate
from olimpiadas.services.role_service import RoleService

router = APIRouter(
    prefix="/events/{event_id}/users",
    tags=["Admin - Users"],
    dependencies=[Depends(require_event_roles(ADMIN))],
)

service = RoleService(ProfileRepository(), UserRepository())


@router.get("", response_model=list[EventUserRead])
def list_event_users(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Users holding a profile in the event, with their profiles (ADM)."""
    return service.list_event_users(session, event_id)


@router.put("/{user_id}/profiles", response_model=UserProfilesRead)
def replace_user_profiles(
    event_id: uuid.UUID,
    user_id: uuid.UUID,
    payload: UserProfilesUpdate,
    session: Session = Depends(get_session),
):
    """
    Replace the profiles a user holds in the event (ADM).

    - At most one of Atleta / Público Geral.
    - Every profile must belong to the event.
    """
    codes = service.assign_user_profiles(
        session, user_id, event_id, payload.profile_ids
    )
    return UserProfilesRead(user_id=user_id, event_id=event_id, role_codes=codes)
