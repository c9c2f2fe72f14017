# olimpiadas/services/payment_service.py
import logging
import smtplib
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from olimpiadas.core.errors import IdentifierConflictError, PaymentNotFoundError
from olimpiadas.core.storage_utils import (
    ALLOWED_PROOF_TYPES,
    delete_proof_url,
    proof_path,
    upload_proof,
)
from olimpiadas.models.payment import Payment
from olimpiadas.models.profile import RegistrationFee
from olimpiadas.models.user import User
from olimpiadas.repositories.payment_repo import PaymentRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.payment import PaymentAmountUpdate, PaymentStatusUpdate
from olimpiadas.services.notification_service import send_payment_proof

logger = logging.getLogger(__name__)

IDENTIFIER_WIDTH = 3

# Max receipt size accepted for upload (5 MB)
MAX_PROOF_BYTES = 5 * 1024 * 1024

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"cancelled"},
    "cancelled": {"pending"},
}


def format_identifier(count: int) -> str:
    """
    Next identifier given how many payments already exist:
    count + 1, zero-padded to at least three digits (0 -> "001",
    42 -> "043", 999 -> "1000").
    """
    return str(count + 1).zfill(IDENTIFIER_WIDTH)


class PaymentService:
    """
    Business logic for registration payments.

    Responsibilities:
      - Generate the sequential per-event payment identifier
      - Create the payment that goes with a new registration
      - Admin status / amount changes
      - Payment proof upload + administrator notification
    """

    def __init__(
        self,
        payment_repo: PaymentRepository,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
    ):
        self.payment_repo = payment_repo
        self.user_repo = user_repo
        self.profile_repo = profile_repo

    # -------- Identifier --------

    def generate_identifier(self, session: Session, event_id: uuid.UUID) -> str:
        """
        Derive the next identifier from the number of payments in the event.

        Two concurrent registrations can read the same count; the
        (event_id, identifier) unique constraint rejects the second insert
        (see create_payment).
        """
        count = self.payment_repo.count_for_event(session, event_id)
        return format_identifier(count)

    # -------- Creation (inside registration transactions) --------

    def create_payment(self, session: Session, payment: Payment) -> Payment:
        """
        Insert a payment without committing.

        Raises:
            IdentifierConflictError(409): if the identifier was taken
            concurrently. The whole transaction is rolled back.
        """
        try:
            return self.payment_repo.save(session, payment)
        except IntegrityError:
            session.rollback()
            logger.warning(
                "Identifier %s already used in event %s",
                payment.identifier,
                payment.event_id,
            )
            raise IdentifierConflictError()

    def ensure_registration_payment(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
        fee: RegistrationFee,
    ) -> Payment:
        """
        Make sure the user has a payment matching `fee` in the event.

        - No payment yet: create one ("pending", or "confirmed" + exempt
          when the fee is exempt).
        - Pending payment: follow the (possibly new) fee.
        - Confirmed / cancelled payments are left alone.
        """
        payment = self.payment_repo.get_for_user_event(session, user_id, event_id)

        if payment is None:
            payment = Payment(
                user_id=user_id,
                event_id=event_id,
                registration_fee_id=fee.id,
                amount=fee.amount,
                identifier=self.generate_identifier(session, event_id),
            )
            if fee.exempt:
                self._mark_exempt(payment)
            return self.create_payment(session, payment)

        if payment.status == "pending":
            payment.registration_fee_id = fee.id
            payment.amount = fee.amount
            if fee.exempt:
                self._mark_exempt(payment)
            return self.payment_repo.save(session, payment)

        return payment

    @staticmethod
    def _mark_exempt(payment: Payment) -> None:
        payment.exempt = True
        payment.status = "confirmed"
        payment.validated_at = datetime.now(timezone.utc)

    # -------- User-facing operations --------

    def get_user_payment(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> Payment:
        payment = self.payment_repo.get_for_user_event(session, user_id, event_id)
        if not payment:
            raise PaymentNotFoundError()
        return payment

    def submit_proof(
        self,
        session: Session,
        user: User,
        event_id: uuid.UUID,
        filename: str,
        content_type: str,
        file_bytes: bytes,
    ) -> Payment:
        """
        Store a payment receipt and notify the administrator.

        Steps:
          1. Validate type / size.
          2. Upload to Storage under <event_id>/<user_id>/.
          3. Save proof_url on the payment, drop the previous receipt.
          4. Email the administrator with the receipt attached.
        """
        ext = ALLOWED_PROOF_TYPES.get(content_type)
        if ext is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported file type. Use PDF, JPEG, PNG or WEBP.",
            )
        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Uploaded file is empty",
            )
        if len(file_bytes) > MAX_PROOF_BYTES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="File too large (max 5MB)",
            )

        payment = self.get_user_payment(session, user.id, event_id)

        previous_url = payment.proof_url
        path = proof_path(event_id, user.id, ext)
        payment.proof_url = upload_proof(path, file_bytes, content_type)
        self.payment_repo.save(session, payment)
        session.commit()
        session.refresh(payment)

        if previous_url and previous_url != payment.proof_url:
            delete_proof_url(previous_url)

        branch = (
            self.user_repo.get_branch(session, user.branch_id)
            if user.branch_id
            else None
        )
        roles = self.profile_repo.list_role_codes(session, user.id, event_id)

        try:
            send_payment_proof(
                user_name=user.full_name,
                user_email=user.email or "",
                branch=branch.name if branch else None,
                roles=roles,
                attachment=(filename, content_type, file_bytes),
            )
        except (RuntimeError, smtplib.SMTPException) as e:
            logger.error("Payment proof notification failed: %s", e)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Payment proof saved, but the notification email could not be sent",
            )

        return payment

    # -------- Admin operations --------

    def list_event_payments(
        self,
        session: Session,
        event_id: uuid.UUID,
        status_filter: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Payment]:
        return self.payment_repo.list_for_event(
            session, event_id, status_filter, skip, limit
        )

    def _get_event_payment(
        self, session: Session, event_id: uuid.UUID, payment_id: int
    ) -> Payment:
        payment = self.payment_repo.get_by_id(session, payment_id)
        if not payment or payment.event_id != event_id:
            raise PaymentNotFoundError()
        return payment

    def update_status(
        self,
        session: Session,
        event_id: uuid.UUID,
        payment_id: int,
        payload: PaymentStatusUpdate,
    ) -> Payment:
        """
        Admin-only status update:

          pending   -> confirmed, cancelled
          confirmed -> cancelled
          cancelled -> pending

        Any other transition raises 400.
        """
        payment = self._get_event_payment(session, event_id, payment_id)

        current = payment.status
        new = payload.status

        if current == new:
            return payment

        if new not in ALLOWED_TRANSITIONS.get(current, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status transition: {current} -> {new}",
            )

        payment.status = new
        if new == "confirmed":
            payment.validated_at = datetime.now(timezone.utc)
            payment.validated_without_proof = (
                payload.validated_without_proof and not payment.proof_url
            )
        else:
            payment.validated_at = None
            payment.validated_without_proof = False

        self.payment_repo.save(session, payment)
        session.commit()
        session.refresh(payment)
        logger.info("Payment %s: %s -> %s", payment.id, current, new)
        return payment

    def update_amount(
        self,
        session: Session,
        event_id: uuid.UUID,
        payment_id: int,
        payload: PaymentAmountUpdate,
    ) -> Payment:
        payment = self._get_event_payment(session, event_id, payment_id)
        payment.amount = payload.amount
        self.payment_repo.save(session, payment)
        session.commit()
        session.refresh(payment)
        return payment
