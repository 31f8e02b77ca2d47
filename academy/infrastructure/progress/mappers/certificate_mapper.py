"""Mapper for Certificate ORM ↔ Domain conversion."""

from academy.domain.common.clock import ensure_utc
from academy.domain.common.value_objects.ids import CertificateId, ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate
from academy.models import Certificate as CertificateORM


class CertificateMapper:
    def to_domain(self, orm_model: CertificateORM) -> Certificate:
        return Certificate.create_with_id(
            id=CertificateId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            program_id=ProgramId(orm_model.program_id),
            url=orm_model.url,
            issued_at=ensure_utc(orm_model.issued_at),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Certificate) -> CertificateORM:
        # Certificates are immutable once issued
        return CertificateORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            program_id=domain_entity.program_id.value,
            url=domain_entity.url,
            issued_at=domain_entity.issued_at,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
