"""Repository for Enrollment domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.commerce.entities.enrollment import Enrollment
from academy.domain.commerce.entities.statuses import EnrollmentStatus
from academy.domain.commerce.exceptions import (
    EnrollmentAlreadyExistsError,
    EnrollmentNotFoundError,
)
from academy.domain.common.value_objects.ids import EnrollmentId, ProgramId, UserId
from academy.infrastructure.commerce.mappers.enrollment_mapper import EnrollmentMapper
from academy.infrastructure.common.persistence import ensure_read_version, guarded_write
from academy.models import Enrollment as EnrollmentORM


class EnrollmentRepository:
    """Repository for Enrollment domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = EnrollmentMapper()

    def find_by_id(
        self, enrollment_id: EnrollmentId, for_update: bool = False
    ) -> Enrollment | None:
        stmt = select(EnrollmentORM).where(EnrollmentORM.id == enrollment_id.value)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_open(
        self, user_id: UserId, program_id: ProgramId, for_update: bool = False
    ) -> Enrollment | None:
        """
        Find the non-cancelled enrollment of a (user, program) pair.

        The partial unique index guarantees at most one such row.
        """
        stmt = select(EnrollmentORM).where(
            EnrollmentORM.user_id == user_id.value,
            EnrollmentORM.program_id == program_id.value,
            EnrollmentORM.status != EnrollmentStatus.CANCELLED,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId) -> list[Enrollment]:
        stmt = (
            select(EnrollmentORM)
            .where(EnrollmentORM.user_id == user_id.value)
            .order_by(EnrollmentORM.created_at, EnrollmentORM.id)
        )
        return [self.mapper.to_domain(orm) for orm in self.db.execute(stmt).scalars().all()]

    def save(self, enrollment: Enrollment) -> Enrollment:
        """
        Save an enrollment entity (create or update).

        Raises:
            EnrollmentAlreadyExistsError: If the pair already has an open enrollment
            ConcurrencyError: If the row was changed by another transaction
        """

        def already_enrolled(_: IntegrityError) -> EnrollmentAlreadyExistsError:
            return EnrollmentAlreadyExistsError(
                enrollment.user_id.value, enrollment.program_id.value
            )

        if enrollment.id.value == 0:
            orm_model = self.mapper.to_orm(enrollment)
            with guarded_write(self.db, "Enrollment", on_conflict=already_enrolled):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(EnrollmentORM, enrollment.id.value, populate_existing=True)
        if not orm_model:
            raise EnrollmentNotFoundError(enrollment.id.value)
        ensure_read_version(
            "Enrollment", enrollment.id.value, enrollment.version, orm_model.version
        )
        with guarded_write(
            self.db, "Enrollment", enrollment.id.value, on_conflict=already_enrolled
        ):
            self.mapper.to_orm(enrollment, orm_model)
        enrollment.version = orm_model.version
        return self.mapper.to_domain(orm_model)
