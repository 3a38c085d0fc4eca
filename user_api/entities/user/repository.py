from typing import Any

from sqlalchemy import func, update
from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from user_api.entities._base import utc_now
from user_api.entities.user.table import UserTable


class UserRepository:
    """Data-access layer for users.

    Every read filters on ``deleted_at IS NULL``, so soft-deleted rows never
    leave the repository.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _active(self) -> SelectOfScalar[UserTable]:
        return select(UserTable).where(col(UserTable.deleted_at).is_(None))

    def _filtered(self, statement, name: str, email: str):
        if name:
            statement = statement.where(
                func.lower(col(UserTable.name)).contains(name.lower(), autoescape=True)
            )
        if email:
            statement = statement.where(
                func.lower(col(UserTable.email)).contains(email.lower(), autoescape=True)
            )
        return statement

    def create(self, user: UserTable) -> UserTable:
        self._session.add(user)
        self._session.flush()
        self._session.refresh(user)
        return user

    def get(self, user_id: int) -> UserTable | None:
        statement = self._active().where(UserTable.id == user_id)
        return self._session.exec(statement).first()

    def count(self, name: str = "", email: str = "") -> int:
        statement = (
            select(func.count())
            .select_from(UserTable)
            .where(col(UserTable.deleted_at).is_(None))
        )
        return self._session.exec(self._filtered(statement, name, email)).one()

    def search(
        self, name: str = "", email: str = "", offset: int = 0, limit: int = 10
    ) -> list[UserTable]:
        statement = self._filtered(self._active(), name, email)
        statement = statement.order_by(col(UserTable.id)).offset(offset).limit(limit)
        return list(self._session.exec(statement).all())

    def update(self, user: UserTable, changes: dict[str, Any]) -> UserTable:
        for field, value in changes.items():
            setattr(user, field, value)
        self._session.add(user)
        self._session.flush()
        self._session.refresh(user)
        return user

    def soft_delete(self, user_id: int) -> bool:
        """Mark a user as deleted. Returns False when no active user matched."""
        statement = (
            update(UserTable)
            .where(col(UserTable.id) == user_id)
            .where(col(UserTable.deleted_at).is_(None))
            .values(deleted_at=utc_now())
        )
        result = self._session.connection().execute(statement)
        return result.rowcount > 0
