"""Create the academy schema: catalog, identity, commerce, progress, community.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

BIGINT_ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

ENROLLMENT_STATUS = ("pending", "active", "completed", "cancelled")
PAYMENT_STATUS = ("pending", "paid", "failed", "refunded")
COMPLETION_STATUS = ("pending", "active", "completed", "cancelled")
BLOG_STATUS = ("created", "in_moderation", "published", "archived")
USER_ROLE = ("student", "teacher", "admin")


def _status(values: tuple[str, ...], name: str) -> sa.Enum:
    return sa.Enum(*values, name=name, create_constraint=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
    ]


def _id_index(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_id"), table, ["id"], unique=False)


def upgrade() -> None:
    """Create all tables, constraints and indexes."""
    # Catalog
    op.create_table(
        "programs",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("program_type", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price >= 0", name="ck_programs_price_non_negative"),
    )
    _id_index("programs")

    for table in ("modules", "courses"):
        op.create_table(
            table,
            sa.Column("id", BIGINT_ID, nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("is_deleted", sa.Boolean(), server_default=sa.false(), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id"),
        )
        _id_index(table)

    op.create_table(
        "lessons",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("course_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("video_url", sa.String(2048), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_id", "position", name="uq_lessons_course_position"),
        sa.CheckConstraint("position > 0", name="ck_lessons_position_positive"),
    )
    _id_index("lessons")
    op.create_index(op.f("ix_lessons_course_id"), "lessons", ["course_id"], unique=False)

    op.create_table(
        "program_modules",
        sa.Column("program_id", sa.BigInteger(), nullable=False),
        sa.Column("module_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"]),
        sa.PrimaryKeyConstraint("program_id", "module_id"),
    )
    op.create_index(
        op.f("ix_program_modules_module_id"), "program_modules", ["module_id"], unique=False
    )

    op.create_table(
        "module_courses",
        sa.Column("module_id", sa.BigInteger(), nullable=False),
        sa.Column("course_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.PrimaryKeyConstraint("module_id", "course_id"),
    )
    op.create_index(
        op.f("ix_module_courses_course_id"), "module_courses", ["course_id"], unique=False
    )

    op.create_table(
        "quizzes",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("lesson_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _id_index("quizzes")
    op.create_index(op.f("ix_quizzes_lesson_id"), "quizzes", ["lesson_id"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("lesson_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _id_index("exercises")
    op.create_index(op.f("ix_exercises_lesson_id"), "exercises", ["lesson_id"], unique=False)

    # Identity
    op.create_table(
        "teaching_groups",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    _id_index("teaching_groups")

    op.create_table(
        "users",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("teaching_group_id", sa.BigInteger(), nullable=False),
        sa.Column("role", _status(USER_ROLE, "user_role"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["teaching_group_id"], ["teaching_groups.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    _id_index("users")
    op.create_index(
        op.f("ix_users_teaching_group_id"), "users", ["teaching_group_id"], unique=False
    )

    # Commerce
    op.create_table(
        "enrollments",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("program_id", sa.BigInteger(), nullable=False),
        sa.Column("status", _status(ENROLLMENT_STATUS, "enrollment_status"), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _id_index("enrollments")
    op.create_index(op.f("ix_enrollments_user_id"), "enrollments", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_enrollments_program_id"), "enrollments", ["program_id"], unique=False
    )
    # At most one non-cancelled enrollment per (user, program)
    op.create_index(
        "uq_enrollments_open_user_program",
        "enrollments",
        ["user_id", "program_id"],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
        sqlite_where=sa.text("status <> 'cancelled'"),
    )

    op.create_table(
        "payments",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("enrollment_id", sa.BigInteger(), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("status", _status(PAYMENT_STATUS, "payment_status"), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["enrollment_id"], ["enrollments.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
        sa.CheckConstraint(
            "(status IN ('paid', 'refunded')) = (paid_at IS NOT NULL)",
            name="ck_payments_paid_at_matches_status",
        ),
    )
    _id_index("payments")
    op.create_index(
        op.f("ix_payments_enrollment_id"), "payments", ["enrollment_id"], unique=False
    )

    # Progress
    op.create_table(
        "program_completions",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("program_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "status", _status(COMPLETION_STATUS, "program_completion_status"), nullable=False
        ),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "program_id", name="uq_program_completions_user_program"
        ),
        sa.CheckConstraint(
            "finished_at IS NULL OR started_at IS NULL OR finished_at >= started_at",
            name="ck_program_completions_chronology",
        ),
    )
    _id_index("program_completions")
    op.create_index(
        op.f("ix_program_completions_user_id"), "program_completions", ["user_id"], unique=False
    )

    op.create_table(
        "certificates",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("program_id", sa.BigInteger(), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column(
            "issued_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "program_id", name="uq_certificates_user_program"),
    )
    _id_index("certificates")
    op.create_index(op.f("ix_certificates_user_id"), "certificates", ["user_id"], unique=False)

    # Community
    op.create_table(
        "discussions",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("lesson_id", sa.BigInteger(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
        sa.ForeignKeyConstraint(["parent_id"], ["discussions.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("parent_id IS NULL OR parent_id <> id", name="ck_discussions_not_self"),
    )
    _id_index("discussions")
    op.create_index(
        op.f("ix_discussions_parent_id"), "discussions", ["parent_id"], unique=False
    )
    op.create_index(
        "ix_discussions_lesson_created",
        "discussions",
        ["lesson_id", "created_at", "id"],
        unique=False,
    )

    op.create_table(
        "blog",
        sa.Column("id", BIGINT_ID, nullable=False),
        sa.Column("student_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("status", _status(BLOG_STATUS, "blog_status"), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    _id_index("blog")
    op.create_index(op.f("ix_blog_student_id"), "blog", ["student_id"], unique=False)
    op.create_index("ix_blog_status_created", "blog", ["status", "created_at"], unique=False)


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    for table in (
        "blog",
        "discussions",
        "certificates",
        "program_completions",
        "payments",
        "enrollments",
        "users",
        "teaching_groups",
        "exercises",
        "quizzes",
        "module_courses",
        "program_modules",
        "lessons",
        "courses",
        "modules",
        "programs",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for enum_name in (
            "blog_status",
            "program_completion_status",
            "payment_status",
            "enrollment_status",
            "user_role",
        ):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
