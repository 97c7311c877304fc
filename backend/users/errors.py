# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Exceptions raised by the repository and the credential module.

The GraphQL resolver is the only place these are caught; it turns them into
the ``error`` string of the response object.
"""


class UserServiceError(Exception):
    """Base class for every expected failure of the user service."""


class UserValidationError(UserServiceError):
    """A field failed the validation rule set (length, email syntax, role)."""


class UserNotFoundError(UserServiceError):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")


class UserConflictError(UserServiceError):
    def __init__(self, message: str = "User with this username or email already exists"):
        super().__init__(message)


class InvalidCredentialsError(UserServiceError):
    """Token could not be decoded: expired, bad signature or malformed."""
