# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
GraphQL resolver – users, user, testPassword, login, createUser, updateUser,
deleteUser.

Error contract
--------------
* Write operations never raise to the client.  Expected failures
  (validation, not found, conflict) come back as the ``error`` string of the
  response object; anything unexpected is logged with its traceback and
  degraded to a generic message (or ``False`` for deleteUser).
* ``login`` logs the username only.  Neither the supplied password nor the
  stored digest is ever written to the log.
* The issued token is not checked by any operation here.

Threading
---------
Strawberry awaits resolvers on the event loop.  SQLAlchemy queries and bcrypt
both block, so each resolver hands its whole body (including the row →
type mapping, which may lazy-load) to ``run_in_threadpool``.
"""

from typing import List, Optional

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from core.logger import logger
from core.security import create_access_token, self_check_password, verify_password
from models.user import UserRole
from users.errors import UserServiceError
from users.mapping import to_optional_user_type, to_user_type, to_user_types
from users.repository import UserRepository
from users.types import LoginResponse, UserResponse, UserRoleType, UserType


def _repository(info: Info) -> UserRepository:
    return info.context["repository"]


# ---------------------------------------------------------------------------
# Blocking operation bodies – always run in the threadpool
# ---------------------------------------------------------------------------


def _list_users(repo: UserRepository) -> List[UserType]:
    return to_user_types(repo.list())


def _get_user(repo: UserRepository, user_id: str) -> Optional[UserType]:
    return to_optional_user_type(repo.get_by_id(user_id))


def _test_password(password: str) -> bool:
    try:
        return self_check_password(password)
    except Exception:
        logger.exception("Password self-check failed")
        return False


def _login(repo: UserRepository, settings, username: str, password: str) -> LoginResponse:
    """Verify credentials and issue a signed token."""
    try:
        logger.info("Login attempt for username=%s", username)
        user = repo.find_by_username_with_password(username)

        if not user:
            logger.info("Login failed for username=%s: user not found", username)
            return LoginResponse(error="User not found")

        if not verify_password(password, user.password):
            logger.info("Login failed for username=%s: invalid password", username)
            return LoginResponse(error="Invalid password")

        token = create_access_token(
            {"sub": user.id, "user_id": user.id, "role": user.role.value},
            secret=settings.jwt_secret,
            expires_minutes=settings.access_token_expire_minutes,
        )
        logger.info("Login succeeded for username=%s", username)
        return LoginResponse(token=token, user=to_user_type(user))
    except Exception as exc:
        logger.exception("Login error for username=%s", username)
        return LoginResponse(error=f"Error during login: {exc}")


def _create_user(repo: UserRepository, fields: dict) -> UserResponse:
    try:
        return UserResponse(user=to_user_type(repo.create(**fields)))
    except UserServiceError as exc:
        logger.info("createUser rejected username=%s: %s", fields.get("username"), exc)
        return UserResponse(error=str(exc))
    except Exception:
        logger.exception("Error creating user username=%s", fields.get("username"))
        return UserResponse(error="Error creating user")


def _update_user(repo: UserRepository, user_id: str, patch: dict) -> UserResponse:
    try:
        return UserResponse(user=to_user_type(repo.update(user_id, **patch)))
    except UserServiceError as exc:
        return UserResponse(error=str(exc))
    except Exception:
        logger.exception("Error updating user id=%s", user_id)
        return UserResponse(error="Error updating user")


def _delete_user(repo: UserRepository, user_id: str) -> bool:
    try:
        return repo.delete(user_id)
    except Exception:
        logger.exception("Error deleting user id=%s", user_id)
        return False


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@strawberry.type
class Query:
    @strawberry.field(description="All users (never includes passwords)")
    async def users(self, info: Info) -> List[UserType]:
        return await run_in_threadpool(_list_users, _repository(info))

    @strawberry.field(description="A single user, or null when the id is unknown")
    async def user(self, info: Info, id: strawberry.ID) -> Optional[UserType]:
        return await run_in_threadpool(_get_user, _repository(info), str(id))

    @strawberry.field(description="Diagnostic: hash a password and verify it against itself")
    async def test_password(self, password: str) -> bool:
        return await run_in_threadpool(_test_password, password)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(self, info: Info, username: str, password: str) -> LoginResponse:
        return await run_in_threadpool(
            _login, _repository(info), info.context["settings"], username, password
        )

    @strawberry.mutation
    async def create_user(
        self,
        info: Info,
        username: str,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        role: UserRoleType = UserRole.USER,
    ) -> UserResponse:
        fields = {
            "username": username,
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number,
            "role": role,
        }
        return await run_in_threadpool(_create_user, _repository(info), fields)

    @strawberry.mutation
    async def update_user(
        self,
        info: Info,
        id: strawberry.ID,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> UserResponse:
        patch = {
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number,
            "is_active": is_active,
        }
        return await run_in_threadpool(_update_user, _repository(info), str(id), patch)

    @strawberry.mutation
    async def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        return await run_in_threadpool(_delete_user, _repository(info), str(id))


schema = strawberry.Schema(query=Query, mutation=Mutation)
