"""Translation of SQLAlchemy persistence failures into domain errors."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from academy.domain.common.exceptions import ConcurrencyError, DomainError

logger = structlog.get_logger(__name__)

# SQLSTATE codes PostgreSQL uses for serialization failures and deadlocks
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def is_serialization_failure(error: DBAPIError) -> bool:
    """Check whether a driver error is a retryable transaction conflict."""
    sqlstate = getattr(error.orig, "pgcode", None) or getattr(error.orig, "sqlstate", None)
    if sqlstate in RETRYABLE_SQLSTATES:
        return True
    # SQLite reports writer contention as "database is locked"
    return isinstance(error, OperationalError) and "database is locked" in str(error.orig)


def ensure_read_version(
    entity_type: str, entity_id: object, read_version: int, stored_version: int
) -> None:
    """
    Reject a write built from a copy that is older than the stored row.

    Raises:
        ConcurrencyError: If another transaction bumped the version since the read
    """
    if read_version != stored_version:
        logger.info(
            "stale_version_detected",
            entity_type=entity_type,
            entity_id=entity_id,
            read_version=read_version,
            stored_version=stored_version,
        )
        raise ConcurrencyError(
            f"{entity_type} was modified by another transaction",
            entity_type=entity_type,
            entity_id=entity_id,
        )


@contextmanager
def guarded_write(
    db: Session,
    entity_type: str,
    entity_id: object = None,
    on_conflict: Callable[[IntegrityError], DomainError] | None = None,
) -> Iterator[None]:
    """
    Run ORM changes inside a SAVEPOINT, flush them and translate store errors.

    A rejected write only rolls back the savepoint, so the caller's
    transaction stays usable after a ConflictError.

    Example:
        with guarded_write(self.db, "Lesson", on_conflict=position_taken):
            self.db.add(orm_model)

    Args:
        db: Session the changes belong to
        entity_type: Entity name used in error details
        entity_id: Entity id used in error details, if known
        on_conflict: Builds the domain error for a unique or check violation

    Raises:
        ConflictError: (from ``on_conflict``) if a constraint rejected the write
        ConcurrencyError: On a stale version or a serialization failure
    """
    try:
        with db.begin_nested():
            yield
            db.flush()
    except StaleDataError as e:
        logger.info("stale_version_detected", entity_type=entity_type, entity_id=entity_id)
        raise ConcurrencyError(
            f"{entity_type} was modified by another transaction",
            entity_type=entity_type,
            entity_id=entity_id,
        ) from e
    except IntegrityError as e:
        if is_serialization_failure(e):
            raise ConcurrencyError(entity_type=entity_type, entity_id=entity_id) from e
        if on_conflict is None:
            raise
        logger.info(
            "integrity_conflict", entity_type=entity_type, entity_id=entity_id, error=str(e.orig)
        )
        raise on_conflict(e) from e
    except DBAPIError as e:
        if is_serialization_failure(e):
            raise ConcurrencyError(entity_type=entity_type, entity_id=entity_id) from e
        raise
