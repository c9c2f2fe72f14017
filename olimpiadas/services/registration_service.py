# olimpiadas/services/registration_service.py
import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlmodel import Session

from olimpiadas.core.errors import (
    EventNotFoundError,
    ProfileNotFoundError,
    RegistrationClosedError,
    RegistrationFeeNotFoundError,
    UserNotFoundError,
)
from olimpiadas.models.payment import Payment
from olimpiadas.models.registration import Registration
from olimpiadas.repositories.event_repo import EventRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.registration_repo import RegistrationRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.services.payment_service import PaymentService
from olimpiadas.services.role_service import RoleService

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    registration: Registration
    already_existed: bool
    payment: Payment | None = None


class RegistrationService:
    """
    Event registration as athlete (ATL) or general public (PGR).

    Responsibilities:
      - Resolve profile, user and registration fee, each with its own
        not-found error
      - Upsert the registration on (user, event)
      - Swap the exclusive profile and create the payment, all in one
        transaction
    """

    def __init__(
        self,
        event_repo: EventRepository,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        registration_repo: RegistrationRepository,
        role_service: RoleService,
        payment_service: PaymentService,
    ):
        self.event_repo = event_repo
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.registration_repo = registration_repo
        self.role_service = role_service
        self.payment_service = payment_service

    def register_for_event(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
        role: str,
        today: date | None = None,
    ) -> RegistrationResult:
        """
        Register (or re-register) a user in an event.

        Steps:
          1. Event must exist and be open for registration.
          2. Resolve the event's profile for `role`.
          3. Resolve the user.
          4. Resolve the fee for (event, profile).
          5. Insert the registration, or update it in place.
          6. Assign the profile, dropping the other exclusive one.
          7. Ensure the matching payment exists.
          8. Commit.

        Raises:
            EventNotFoundError, RegistrationClosedError, ProfileNotFoundError,
            UserNotFoundError, RegistrationFeeNotFoundError,
            IdentifierConflictError
        """
        event = self.event_repo.get_by_id(session, event_id)
        if not event:
            raise EventNotFoundError()
        if not event.is_open_on(today or date.today()):
            raise RegistrationClosedError()

        profile = self.profile_repo.get_for_event_by_code(session, event_id, role)
        if not profile:
            logger.warning("No %s profile in event %s", role, event_id)
            raise ProfileNotFoundError()

        user = self.user_repo.get_by_id(session, user_id)
        if not user:
            raise UserNotFoundError()

        fee = self.profile_repo.get_fee(session, event_id, profile.id)
        if not fee:
            logger.warning("No fee for profile %s in event %s", profile.id, event_id)
            raise RegistrationFeeNotFoundError()

        registration = self.registration_repo.get_for_user_event(
            session, user_id, event_id
        )
        already_existed = registration is not None

        if registration is None:
            registration = Registration(
                user_id=user_id,
                event_id=event_id,
                registration_fee_id=fee.id,
                selected_profile_id=profile.id,
            )
        else:
            registration.registration_fee_id = fee.id
            registration.selected_profile_id = profile.id
            registration.updated_at = datetime.now(timezone.utc)

        registration = self.registration_repo.save(session, registration)

        self.role_service.assign_exclusive_profile(
            session, user_id, event_id, profile.id
        )
        payment = self.payment_service.ensure_registration_payment(
            session, user_id, event_id, fee
        )

        session.commit()
        session.refresh(registration)
        session.refresh(payment)

        logger.info(
            "User %s %s in event %s as %s",
            user_id,
            "re-registered" if already_existed else "registered",
            event_id,
            role,
        )
        return RegistrationResult(
            registration=registration,
            already_existed=already_existed,
            payment=payment,
        )
