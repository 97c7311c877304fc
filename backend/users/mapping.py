"""Conversion from ``users`` rows to the GraphQL ``User`` projection."""

from typing import List, Optional

import strawberry

from models.user import User
from users.types import UserType


def to_user_type(user: User) -> UserType:
    return UserType(
        id=strawberry.ID(user.id),
        username=user.username,
        email=user.email,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
        first_name=user.first_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        last_login_at=user.last_login_at,
    )


def to_optional_user_type(user: Optional[User]) -> Optional[UserType]:
    return to_user_type(user) if user is not None else None


def to_user_types(users: List[User]) -> List[UserType]:
    return [to_user_type(u) for u in users]
