# olimpiadas/routers/payments.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    UploadFile,
    status,
)
from sqlmodel import Session

from olimpiadas.core.auth import require_auth, require_event_roles
from olimpiadas.database import get_session
from olimpiadas.models.profile import ADMIN, ORGANIZER
from olimpiadas.models.user import User
from olimpiadas.repositories.payment_repo import PaymentRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.payment import (
    PaymentAmountUpdate,
    PaymentRead,
    PaymentStatus,
    PaymentStatusUpdate,
)
from olimpiadas.services.payment_service import PaymentService

router = APIRouter(prefix="/events/{event_id}/payments", tags=["Payments"])

service = PaymentService(PaymentRepository(), UserRepository(), ProfileRepository())

require_staff = require_event_roles(ADMIN, ORGANIZER)


# -------- User-facing endpoints --------


@router.get("/me", response_model=PaymentRead)
def read_my_payment(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """Payment (amount, identifier, status) of the current user in the event."""
    return service.get_user_payment(session, current_user.id, event_id)


@router.post(
    "/me/proof",
    response_model=PaymentRead,
    summary="Upload a payment proof",
)
def upload_my_proof(
    event_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Upload the payment receipt and notify the administrator by email.

    - Accepts PDF, JPEG, PNG, WEBP (max 5MB).
    - Replaces any previous receipt URL.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.submit_proof(
        session=session,
        user=current_user,
        event_id=event_id,
        filename=file.filename or "comprovante",
        content_type=file.content_type,
        file_bytes=file_bytes,
    )


# -------- Admin / organizer endpoints --------


@router.get(
    "",
    response_model=list[PaymentRead],
    dependencies=[Depends(require_staff)],
)
def list_event_payments(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
    status_filter: PaymentStatus | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """List payments of the event, optionally by status (ADM / ORE)."""
    return service.list_event_payments(session, event_id, status_filter, skip, limit)


@router.patch(
    "/{payment_id}/status",
    response_model=PaymentRead,
    dependencies=[Depends(require_staff)],
)
def update_payment_status(
    event_id: uuid.UUID,
    payment_id: int,
    payload: PaymentStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Update payment status (ADM / ORE).

      pending   -> confirmed, cancelled

      confirmed -> cancelled

      cancelled -> pending
    """
    return service.update_status(session, event_id, payment_id, payload)


@router.patch(
    "/{payment_id}/amount",
    response_model=PaymentRead,
    dependencies=[Depends(require_staff)],
)
def update_payment_amount(
    event_id: uuid.UUID,
    payment_id: int,
    payload: PaymentAmountUpdate,
    session: Session = Depends(get_session),
):
    """Override the amount due, e.g. for a negotiated discount (ADM / ORE)."""
    return service.update_amount(session, event_id, payment_id, payload)
