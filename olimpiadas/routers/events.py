# olimpiadas/routers/events.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from olimpiadas.database import get_session
from olimpiadas.repositories.event_repo import EventRepository
from olimpiadas.schemas.event import EventRead, EventStatus
from olimpiadas.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["Events"])

repo = EventRepository()
service = EventService(repo)


@router.get("", response_model=list[EventRead])
def list_events(
    session: Session = Depends(get_session),
    status: EventStatus = "active",
    skip: int = 0,
    limit: int = 50,
):
    """
    List events (public).

    - Only active events by default.
    """
    return service.list_events(session, status=status, skip=skip, limit=limit)


@router.get("/{event_id}", response_model=EventRead)
def get_event(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Get a single event by id (public)."""
    return service.get_event(session, event_id)
