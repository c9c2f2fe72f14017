# olimpiadas/routers/registrations.py
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from olimpiadas.core.auth import require_auth
from olimpiadas.database import get_session
from olimpiadas.models.user import User
from olimpiadas.repositories.event_repo import EventRepository
from olimpiadas.repositories.payment_repo import PaymentRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.registration_repo import RegistrationRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.registration import (
    DependentCreate,
    RegistrationCreate,
    RegistrationRead,
    RegistrationResultRead,
)
from olimpiadas.schemas.payment import PaymentRead
from olimpiadas.schemas.user import UserRead
from olimpiadas.services.dependent_service import DependentService
from olimpiadas.services.payment_service import PaymentService
from olimpiadas.services.registration_service import RegistrationService
from olimpiadas.services.role_service import RoleService

router = APIRouter(prefix="/events", tags=["Registrations"])

event_repo = EventRepository()
user_repo = UserRepository()
profile_repo = ProfileRepository()
registration_repo = RegistrationRepository()
payment_repo = PaymentRepository()

role_service = RoleService(profile_repo, user_repo)
payment_service = PaymentService(payment_repo, user_repo, profile_repo)
service = RegistrationService(
    event_repo,
    user_repo,
    profile_repo,
    registration_repo,
    role_service,
    payment_service,
)
dependent_service = DependentService(
    user_repo,
    profile_repo,
    registration_repo,
    payment_repo,
    role_service,
    payment_service,
)


@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationResultRead,
    responses={status.HTTP_201_CREATED: {"model": RegistrationResultRead}},
)
def register_for_event(
    event_id: uuid.UUID,
    payload: RegistrationCreate,
    response: Response,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Register the current user in an event as athlete (ATL) or general
    public (PGR).

    - 201 when the registration was created, 200 when an existing one was
      updated (e.g. switching from PGR to ATL).
    - 404 with a distinct message when the profile, user or fee is missing.
    """
    result = service.register_for_event(
        session, current_user.id, event_id, payload.role
    )
    if not result.already_existed:
        response.status_code = status.HTTP_201_CREATED

    return RegistrationResultRead(
        registration=RegistrationRead.model_validate(result.registration),
        already_existed=result.already_existed,
        payment=PaymentRead.model_validate(result.payment) if result.payment else None,
    )


# -------- Dependents --------


@router.post(
    "/{event_id}/dependents",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register_dependent(
    event_id: uuid.UUID,
    payload: DependentCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Register a child (12 or younger) under the current user.

    The child gets the C-6 or C+7 profile by age, plus DEP, and an exempt
    confirmed payment.
    """
    dependent = dependent_service.register_dependent(
        session, current_user, event_id, payload
    )
    return UserRead.from_model(dependent)
