"""Database models."""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from academy.database import Base
from academy.domain.commerce.entities.statuses import EnrollmentStatus, PaymentStatus
from academy.domain.community.entities.blog_post import BlogPostStatus
from academy.domain.identity.entities.user import UserRole
from academy.domain.progress.entities.statuses import CompletionStatus

# BIGSERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


def _enum_column(enum_class: type[PyEnum], name: str) -> Enum:
    """Closed status set stored by value, with a CHECK where there is no native enum."""
    return Enum(
        enum_class,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        create_constraint=True,
        validate_strings=True,
    )


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# Catalog


class Program(TimestampMixin, Base):
    """Top-level sellable curriculum."""

    __tablename__ = "programs"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_programs_price_non_negative"),)

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    program_type: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Program(id={self.id}, name='{self.name}')>"


class Module(TimestampMixin, Base):
    """Reusable grouping of courses."""

    __tablename__ = "modules"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )


class Course(TimestampMixin, Base):
    """Reusable grouping of lessons."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )


class Lesson(TimestampMixin, Base):
    """Lesson at a fixed position inside a course."""

    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("course_id", "position", name="uq_lessons_course_position"),
        CheckConstraint("position > 0", name="ck_lessons_position_positive"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )


class ProgramModule(Base):
    """Association between a program and a module."""

    __tablename__ = "program_modules"

    program_id: Mapped[int] = mapped_column(ForeignKey("programs.id"), primary_key=True)
    module_id: Mapped[int] = mapped_column(ForeignKey("modules.id"), primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ModuleCourse(Base):
    """Association between a module and a course."""

    __tablename__ = "module_courses"

    module_id: Mapped[int] = mapped_column(ForeignKey("modules.id"), primary_key=True)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Quiz(TimestampMixin, Base):
    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)


class Exercise(TimestampMixin, Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)


# Identity


class TeachingGroup(TimestampMixin, Base):
    __tablename__ = "teaching_groups"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class User(TimestampMixin, Base):
    """Platform user: student, teacher or admin."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    teaching_group_id: Mapped[int] = mapped_column(
        ForeignKey("teaching_groups.id"), nullable=False, index=True
    )
    role: Mapped[UserRole] = mapped_column(
        _enum_column(UserRole, "user_role"), nullable=False, default=UserRole.STUDENT
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


# Commerce


class Enrollment(TimestampMixin, Base):
    """A user's registration to a program."""

    __tablename__ = "enrollments"
    __table_args__ = (
        # At most one non-cancelled enrollment per (user, program)
        Index(
            "uq_enrollments_open_user_program",
            "user_id",
            "program_id",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(
        ForeignKey("programs.id"), nullable=False, index=True
    )
    status: Mapped[EnrollmentStatus] = mapped_column(
        _enum_column(EnrollmentStatus, "enrollment_status"),
        nullable=False,
        default=EnrollmentStatus.PENDING,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Payment(TimestampMixin, Base):
    """One payment attempt against an enrollment."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
        CheckConstraint(
            "(status IN ('paid', 'refunded')) = (paid_at IS NOT NULL)",
            name="ck_payments_paid_at_matches_status",
        ),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    enrollment_id: Mapped[int] = mapped_column(
        ForeignKey("enrollments.id"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        _enum_column(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


# Progress


class ProgramCompletion(TimestampMixin, Base):
    """Progress of a user through a program."""

    __tablename__ = "program_completions"
    __table_args__ = (
        UniqueConstraint("user_id", "program_id", name="uq_program_completions_user_program"),
        CheckConstraint(
            "finished_at IS NULL OR started_at IS NULL OR finished_at >= started_at",
            name="ck_program_completions_chronology",
        ),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(ForeignKey("programs.id"), nullable=False)
    status: Mapped[CompletionStatus] = mapped_column(
        _enum_column(CompletionStatus, "program_completion_status"),
        nullable=False,
        default=CompletionStatus.PENDING,
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Certificate(TimestampMixin, Base):
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("user_id", "program_id", name="uq_certificates_user_program"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(ForeignKey("programs.id"), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


# Community


class Discussion(TimestampMixin, Base):
    """Discussion node; parent_id points at another node of the same lesson."""

    __tablename__ = "discussions"
    __table_args__ = (
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_discussions_not_self"),
        Index("ix_discussions_lesson_created", "lesson_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id"), nullable=False)
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("discussions.id"), nullable=True, index=True
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)


class BlogPost(TimestampMixin, Base):
    """Student blog post."""

    __tablename__ = "blog"
    __table_args__ = (Index("ix_blog_status_created", "status", "created_at"),)

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[BlogPostStatus] = mapped_column(
        _enum_column(BlogPostStatus, "blog_status"),
        nullable=False,
        default=BlogPostStatus.CREATED,
    )
