# olimpiadas/services/event_service.py
import uuid

from sqlmodel import Session

from olimpiadas.core.errors import EventNotFoundError
from olimpiadas.models.event import Event
from olimpiadas.repositories.event_repo import EventRepository


class EventService:
    """Read-only event lookups for the event selection screen."""

    def __init__(self, repo: EventRepository):
        self.repo = repo

    def list_events(
        self,
        session: Session,
        status: str = "active",
        skip: int = 0,
        limit: int = 50,
    ) -> list[Event]:
        return self.repo.list_by_status(session, status, skip, limit)

    def get_event(self, session: Session, event_id: uuid.UUID) -> Event:
        event = self.repo.get_by_id(session, event_id)
        if not event:
            raise EventNotFoundError()
        return event
