# olimpiadas/repositories/event_repo.py
import uuid

from sqlmodel import Session, select

from olimpiadas.models.event import Event


class EventRepository:
    """Read-only access to events."""

    def get_by_id(self, session: Session, event_id: uuid.UUID) -> Event | None:
        return session.get(Event, event_id)

    def list_by_status(
        self,
        session: Session,
        status: str = "active",
        skip: int = 0,
        limit: int = 50,
    ) -> list[Event]:
        stmt = (
            select(Event)
            .where(Event.status == status)
            .order_by(Event.registration_start.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()
