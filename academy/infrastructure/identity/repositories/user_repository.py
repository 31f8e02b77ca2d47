"""Repository for User domain entities."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.domain.common.value_objects.ids import UserId
from academy.domain.identity.entities.user import User
from academy.domain.identity.exceptions import EmailAlreadyExistsError, UserNotFoundError
from academy.infrastructure.common.persistence import guarded_write
from academy.infrastructure.identity.mappers.user_mapper import UserMapper
from academy.models import User as UserORM


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        orm_model = self.db.get(UserORM, user_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email.strip().lower())
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Save a user entity (create or update).

        Raises:
            EmailAlreadyExistsError: If another user already has the email
        """

        def email_taken(_: IntegrityError) -> EmailAlreadyExistsError:
            return EmailAlreadyExistsError(user.email)

        if user.id.value == 0:
            orm_model = self.mapper.to_orm(user)
            with guarded_write(self.db, "User", on_conflict=email_taken):
                self.db.add(orm_model)
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(UserORM, user.id.value)
        if not orm_model:
            raise UserNotFoundError(user.id.value)
        with guarded_write(self.db, "User", user.id.value, on_conflict=email_taken):
            self.mapper.to_orm(user, orm_model)
        return self.mapper.to_domain(orm_model)
