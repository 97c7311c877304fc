# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
GraphQL types exposed by the API.

``UserType`` is a projection of the ORM row: it deliberately has no password
field, so no query can ever select one.
"""

from datetime import datetime
from typing import Optional

import strawberry

from models.user import UserRole

UserRoleType = strawberry.enum(UserRole, name="UserRole", description="User role in the system")


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    username: str
    email: str
    role: UserRoleType
    is_active: bool
    created_at: datetime
    updated_at: datetime
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    last_login_at: Optional[datetime] = None


@strawberry.type
class UserResponse:
    error: Optional[str] = None
    user: Optional[UserType] = None


@strawberry.type
class LoginResponse:
    error: Optional[str] = None
    token: Optional[str] = None
    user: Optional[UserType] = None
