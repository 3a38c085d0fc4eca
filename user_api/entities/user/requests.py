"""Request and query DTOs for the user endpoints.

These are transient models bound from the HTTP request by the binding
middleware and validated on construction.
"""

from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field

# Offsets computed from page * page_size must fit a signed 64-bit column
MAX_PAGE = 2**31


def check_email(value: str) -> str:
    """Validate address syntax and return the value exactly as submitted."""
    # Display-name forms such as "Bob <bob@example.com>" are not addresses
    if "<" in value or ">" in value:
        raise ValueError("value is not a valid email address")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


Email = Annotated[str, AfterValidator(check_email)]

EMAIL_SCHEMA = {"format": "email"}


class CreateUserRequest(BaseModel):
    """Body of ``POST /users``."""

    name: str = Field(min_length=1, description="User's name")
    email: Email = Field(
        description="User's email address", json_schema_extra=EMAIL_SCHEMA
    )
    age: int = Field(ge=1, le=150, strict=True, description="User's age")
    phone: str = Field(default="", description="User's phone number")


class UpdateUserRequest(BaseModel):
    """Body of ``PUT /users/{id}``.

    Every field is optional. Only fields the client actually sent with a
    non-null value are applied, so an empty string still counts as a value.
    """

    name: str | None = Field(default=None, description="New name")
    email: Email | None = Field(
        default=None, description="New email address", json_schema_extra=EMAIL_SCHEMA
    )
    age: int | None = Field(
        default=None, ge=1, le=150, strict=True, description="New age"
    )
    phone: str | None = Field(default=None, description="New phone number")

    def changes(self) -> dict[str, Any]:
        """Return the sparse field -> value map of client supplied fields."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class GetUsersQuery(BaseModel):
    """Query string of ``GET /users``."""

    page: int | None = Field(default=None, ge=1, le=MAX_PAGE, description="Page number")
    page_size: int | None = Field(
        default=None, ge=1, le=100, description="Page size"
    )
    name: str = Field(default="", description="Filter by name")
    email: str = Field(default="", description="Filter by email")
