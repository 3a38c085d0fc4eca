"""User database table model."""

from sqlmodel import Field

from user_api.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Email uniqueness is enforced by the unique index only, and the index
    covers soft-deleted rows as well.
    """

    __tablename__ = "users"

    name: str = Field(nullable=False)
    email: str = Field(nullable=False, unique=True, index=True)
    age: int = Field(default=0)
    phone: str = Field(default="")
