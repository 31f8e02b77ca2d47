"""Repository for Certificate domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.common.value_objects.ids import ProgramId, UserId
from academy.domain.progress.entities.certificate import Certificate
from academy.domain.progress.exceptions import CertificateAlreadyIssuedError
from academy.infrastructure.common.persistence import guarded_write
from academy.infrastructure.progress.mappers.certificate_mapper import CertificateMapper
from academy.models import Certificate as CertificateORM


class CertificateRepository:
    """Repository for Certificate domain entities. Certificates are insert-only."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CertificateMapper()

    def find_by_pair(self, user_id: UserId, program_id: ProgramId) -> Certificate | None:
        stmt = select(CertificateORM).where(
            CertificateORM.user_id == user_id.value,
            CertificateORM.program_id == program_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId) -> list[Certificate]:
        stmt = (
            select(CertificateORM)
            .where(CertificateORM.user_id == user_id.value)
            .order_by(CertificateORM.issued_at.desc(), CertificateORM.id.desc())
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, certificate: Certificate) -> Certificate:
        """
        Insert a certificate.

        Raises:
            CertificateAlreadyIssuedError: If the pair already has a certificate
            ValueError: If the certificate was already persisted
        """
        if certificate.id.value != 0:
            raise ValueError("Issued certificates cannot be modified")

        def already_issued(_: IntegrityError) -> CertificateAlreadyIssuedError:
            return CertificateAlreadyIssuedError(
                certificate.user_id.value, certificate.program_id.value
            )

        orm_model = self.mapper.to_orm(certificate)
        with guarded_write(self.db, "Certificate", on_conflict=already_issued):
            self.db.add(orm_model)
        return self.mapper.to_domain(orm_model)
