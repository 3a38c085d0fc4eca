from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity with a database-assigned identifier and audit timestamps."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class EntityTable(SQLModel, table=False):
    """Base persistence model with audit timestamps and a soft-delete marker.

    Rows are never physically removed; ``deleted_at`` is set instead and the
    repositories exclude such rows from every read.
    """

    id: int | None = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"onupdate": utc_now},
    )
    deleted_at: datetime | None = Field(default=None, index=True)
