"""User domain entity."""

from pydantic import BaseModel, Field

from user_api.entities._base import Entity


class User(Entity):
    """User entity representing a person in the system.

    This is the model handed back to API clients; the soft-delete marker is
    never serialized.
    """

    name: str = Field(description="User's name")
    email: str = Field(description="User's email address")
    age: int = Field(default=0, description="User's age")
    phone: str = Field(default="", description="User's phone number")


class UserPage(BaseModel):
    """One page of users plus the total number of matching users."""

    users: list[User]
    total: int
    page: int
    page_size: int
