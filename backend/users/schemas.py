# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Pydantic models holding the validation rule set for user writes.

The repository runs every create through :class:`CreateUserRequest` before
anything touches the database.  The messages below are returned verbatim in
the ``error`` field of the GraphQL response.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, ValidationError, field_validator

from models.user import UserRole
from users.errors import UserValidationError

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6


# -- Requests --------------------------------------------------------------


class CreateUserRequest(BaseModel):
    username: str
    email: EmailStr
    password: str
    role: UserRole = UserRole.USER
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("username")
    @classmethod
    def _username_length(cls, value: str) -> str:
        if len(value) < USERNAME_MIN_LENGTH:
            raise ValueError("Username must be at least 3 characters long")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError("Password must be at least 6 characters long")
        return value


class UpdateUserRequest(BaseModel):
    """Patch fields; ``None`` means "not provided"."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: Optional[bool] = None


# -- Helpers ---------------------------------------------------------------

# Messages for errors raised by pydantic itself rather than by our validators
_FIELD_MESSAGES = {
    "email": "Invalid email format",
    "role": "Invalid role. Must be 'admin', 'user' or 'manager'",
}


def validate_create(fields: dict) -> CreateUserRequest:
    """
    Validate a create payload.  Raises :class:`UserValidationError` carrying
    the message of the first failing rule.
    """
    try:
        return CreateUserRequest(**fields)
    except ValidationError as exc:
        raise UserValidationError(_first_message(exc)) from exc


def _first_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = first["loc"][0] if first["loc"] else ""
    if field in _FIELD_MESSAGES:
        return _FIELD_MESSAGES[field]
    if first["type"] == "value_error":
        # "Value error, <our message>" – keep only our message
        return str(first["ctx"]["error"])
    return f"Invalid value for {field}"
