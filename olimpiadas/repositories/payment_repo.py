# olimpiadas/repositories/payment_repo.py
import uuid

from sqlmodel import Session, func, select

from olimpiadas.models.payment import Payment


class PaymentRepository:
    """
    Data access layer for payments.

    NOTE:
      - No commits here; payments are created inside registration
        transactions. The service is responsible for session.commit().
    """

    def count_for_event(self, session: Session, event_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Payment).where(
            Payment.event_id == event_id
        )
        return session.exec(stmt).one()

    def get_by_id(self, session: Session, payment_id: int) -> Payment | None:
        return session.get(Payment, payment_id)

    def get_for_user_event(
        self,
        session: Session,
        user_id: uuid.UUID,
        event_id: uuid.UUID,
    ) -> Payment | None:
        stmt = (
            select(Payment)
            .where(Payment.user_id == user_id, Payment.event_id == event_id)
            .order_by(Payment.created_at.desc())
        )
        return session.exec(stmt).first()

    def list_for_event(
        self,
        session: Session,
        event_id: uuid.UUID,
        status: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Payment]:
        stmt = select(Payment).where(Payment.event_id == event_id)
        if status:
            stmt = stmt.where(Payment.status == status)
        stmt = stmt.order_by(Payment.id).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def save(self, session: Session, payment: Payment) -> Payment:
        session.add(payment)
        session.flush()
        session.refresh(payment)
        return payment
