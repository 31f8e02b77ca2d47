"""Mapper for Payment ORM ↔ Domain conversion."""

from academy.domain.commerce.entities.payment import Payment
from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import EnrollmentId, PaymentId
from academy.models import Payment as PaymentORM


class PaymentMapper:
    def to_domain(self, orm_model: PaymentORM) -> Payment:
        return Payment.create_with_id(
            id=PaymentId(orm_model.id),
            enrollment_id=EnrollmentId(orm_model.enrollment_id),
            amount=orm_model.amount,
            status=orm_model.status,
            paid_at=ensure_utc(orm_model.paid_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            version=orm_model.version,
        )

    def to_orm(self, domain_entity: Payment, orm_model: PaymentORM | None = None) -> PaymentORM:
        if orm_model:
            orm_model.status = domain_entity.status
            orm_model.paid_at = domain_entity.paid_at
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return PaymentORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            enrollment_id=domain_entity.enrollment_id.value,
            amount=domain_entity.amount,
            status=domain_entity.status,
            paid_at=domain_entity.paid_at,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
