"""Repository for Payment domain entities."""

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from academy.domain.commerce.entities.payment import Payment
from academy.domain.commerce.entities.statuses import PaymentStatus
from academy.domain.commerce.exceptions import PaymentNotFoundError
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId
from academy.infrastructure.commerce.mappers.payment_mapper import PaymentMapper
from academy.infrastructure.common.persistence import ensure_read_version, guarded_write
from academy.models import Payment as PaymentORM


class PaymentRepository:
    """Repository for Payment domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PaymentMapper()

    def find_by_id(self, payment_id: PaymentId, for_update: bool = False) -> Payment | None:
        stmt = select(PaymentORM).where(PaymentORM.id == payment_id.value)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_enrollment(self, enrollment_id: EnrollmentId) -> list[Payment]:
        stmt = (
            select(PaymentORM)
            .where(PaymentORM.enrollment_id == enrollment_id.value)
            .order_by(PaymentORM.created_at, PaymentORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def has_paid_payment(self, enrollment_id: EnrollmentId) -> bool:
        stmt = select(
            exists().where(
                PaymentORM.enrollment_id == enrollment_id.value,
                PaymentORM.status == PaymentStatus.PAID,
            )
        )
        return bool(self.db.execute(stmt).scalar())

    def save(self, payment: Payment) -> Payment:
        """
        Save a payment entity (create or update).

        Raises:
            ConcurrencyError: If the row was changed by another transaction
        """
        if payment.id.value == 0:
            orm_model = self.mapper.to_orm(payment)
            with guarded_write(self.db, "Payment"):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(PaymentORM, payment.id.value, populate_existing=True)
        if not orm_model:
            raise PaymentNotFoundError(payment.id.value)
        ensure_read_version("Payment", payment.id.value, payment.version, orm_model.version)
        with guarded_write(self.db, "Payment", payment.id.value):
            self.mapper.to_orm(payment, orm_model)
        payment.version = orm_model.version
        return self.mapper.to_domain(orm_model)
