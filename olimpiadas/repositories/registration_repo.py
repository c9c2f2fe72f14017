# olimpiadas/repositories/registration_repo.py
import uuid

from sqlmodel import Session, select

from olimpiadas.models.registration import Registration


class RegistrationRepository:
    """
    Data access layer for event registrations.

    No commits here; the registration service owns the transaction.
    """

    def get_for_user_event(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> Registration | None:
        stmt = select(Registration).where(
            Registration.user_id == user_id,
            Registration.event_id == event_id,
        )
        return session.exec(stmt).first()

    def save(self, session: Session, registration: Registration) -> Registration:
        """Insert or update without committing, but ensure id is populated."""
        session.add(registration)
        session.flush()
        session.refresh(registration)
        return registration
