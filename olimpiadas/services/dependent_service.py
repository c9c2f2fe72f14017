# olimpiadas/services/dependent_service.py
import logging
import uuid
from datetime import date, datetime, timezone

from sqlmodel import Session

from olimpiadas.core.config import get_settings
from olimpiadas.core.errors import (
    DependentBirthDateMismatchError,
    DependentNotOwnedError,
    InvalidDependentAgeError,
    ProfileNotFoundError,
    RegistrationFeeNotFoundError,
    UserNotFoundError,
)
from olimpiadas.models.payment import Payment
from olimpiadas.models.profile import CHILD_7_TO_12, CHILD_UNDER_7, DEPENDENT
from olimpiadas.models.registration import Registration
from olimpiadas.models.user import User
from olimpiadas.repositories.payment_repo import PaymentRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.registration_repo import RegistrationRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.registration import DependentCreate
from olimpiadas.services.payment_service import PaymentService
from olimpiadas.services.role_service import RoleService

settings = get_settings()
logger = logging.getLogger(__name__)


def age_on(birth_date: date, today: date) -> int:
    """Completed years between birth_date and today."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def dependent_profile_code(age: int) -> str:
    """Age band of a dependent: up to 6 years -> C-6, otherwise C+7."""
    return CHILD_UNDER_7 if age <= 6 else CHILD_7_TO_12


class DependentService:
    """
    Children registered by a guardian.

    A dependent has no auth account: the guardian creates the user row,
    which gets the age-banded child profile plus the DEP profile, an
    exempt confirmed payment and a registration, in one transaction.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        registration_repo: RegistrationRepository,
        payment_repo: PaymentRepository,
        role_service: RoleService,
        payment_service: PaymentService,
    ):
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.registration_repo = registration_repo
        self.payment_repo = payment_repo
        self.role_service = role_service
        self.payment_service = payment_service

    def register_dependent(
        self,
        session: Session,
        guardian: User,
        event_id: uuid.UUID,
        payload: DependentCreate,
        today: date | None = None,
    ) -> User:
        """
        Create a dependent under `guardian` and register them in the event.

        Phone and branch are inherited from the guardian.

        Raises:
            InvalidDependentAgeError(400): dependent older than
            DEPENDENT_MAX_AGE (older children use the regular sign-up).
        """
        today = today or date.today()
        age = age_on(payload.birth_date, today)
        if age > settings.DEPENDENT_MAX_AGE:
            raise InvalidDependentAgeError(age)

        dependent = self.user_repo.add(
            session,
            User(
                full_name=payload.full_name,
                phone=guardian.phone,
                branch_id=guardian.branch_id,
                document_type=payload.document_type,
                document_number=payload.document_number,
                gender=payload.gender,
                birth_date=payload.birth_date,
                registered_by_id=guardian.id,
                confirmed=True,
            ),
        )

        self._register(session, dependent, event_id, payload.birth_date, today)

        session.commit()
        session.refresh(dependent)
        logger.info(
            "Guardian %s registered dependent %s in event %s",
            guardian.id,
            dependent.id,
            event_id,
        )
        return dependent

    def process_dependent_registration(
        self,
        session: Session,
        guardian_id: uuid.UUID,
        dependent_id: uuid.UUID,
        event_id: uuid.UUID,
        birth_date: date,
        today: date | None = None,
    ) -> Registration:
        """
        Register an existing dependent of `guardian_id` in an event.

        The age band comes from the birth date stored on the dependent; the
        birth_date sent by the caller must match it.

        Raises:
            UserNotFoundError(404): unknown dependent.
            DependentNotOwnedError(403): dependent registered by someone else.
            DependentBirthDateMismatchError(400): birth_date differs from
            the stored one.
        """
        dependent = self.user_repo.get_by_id(session, dependent_id)
        if not dependent:
            raise UserNotFoundError()
        if dependent.registered_by_id != guardian_id:
            raise DependentNotOwnedError()
        if dependent.birth_date is not None and dependent.birth_date != birth_date:
            raise DependentBirthDateMismatchError()

        registration = self._register(
            session,
            dependent,
            event_id,
            dependent.birth_date or birth_date,
            today or date.today(),
        )

        session.commit()
        session.refresh(registration)
        return registration

    def _register(
        self,
        session: Session,
        dependent: User,
        event_id: uuid.UUID,
        birth_date: date,
        today: date,
    ) -> Registration:
        age = age_on(birth_date, today)
        if age < 0 or age > settings.DEPENDENT_MAX_AGE:
            raise InvalidDependentAgeError(age)

        code = dependent_profile_code(age)
        logger.info("Dependent %s is %s years old -> %s", dependent.id, age, code)

        child_profile = self.profile_repo.get_for_event_by_code(session, event_id, code)
        dependent_profile = self.profile_repo.get_for_event_by_code(
            session, event_id, DEPENDENT
        )
        if not child_profile or not dependent_profile:
            raise ProfileNotFoundError(
                f"Profiles {code} / {DEPENDENT} not found for this event"
            )

        fee = self.profile_repo.get_fee(session, event_id, child_profile.id)
        if not fee:
            raise RegistrationFeeNotFoundError()

        self.role_service.grant_profiles(
            session, dependent.id, event_id, [child_profile.id, dependent_profile.id]
        )

        if not self.payment_repo.get_for_user_event(session, dependent.id, event_id):
            self.payment_service.create_payment(
                session,
                Payment(
                    user_id=dependent.id,
                    event_id=event_id,
                    registration_fee_id=fee.id,
                    amount=fee.amount,
                    status="confirmed",
                    exempt=True,
                    identifier=self.payment_service.generate_identifier(
                        session, event_id
                    ),
                    validated_at=datetime.now(timezone.utc),
                ),
            )

        registration = self.registration_repo.get_for_user_event(
            session, dependent.id, event_id
        )
        if registration is None:
            registration = Registration(
                user_id=dependent.id,
                event_id=event_id,
                registration_fee_id=fee.id,
                selected_profile_id=child_profile.id,
            )
        else:
            registration.registration_fee_id = fee.id
            registration.selected_profile_id = child_profile.id
            registration.updated_at = datetime.now(timezone.utc)
        registration = self.registration_repo.save(session, registration)

        dependent.confirmed = True
        session.add(dependent)
        return registration
