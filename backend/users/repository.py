# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
UserRepository – the only code that reads or writes the ``users`` table.

The repository is built around a session handed in by the caller (one per
request).  Every write path goes through :meth:`prepare_for_persistence`,
which is where plaintext passwords are replaced with their bcrypt digest.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from core.logger import logger
from core.security import hash_password
from models.user import User
from users.errors import UserConflictError, UserNotFoundError
from users.schemas import UpdateUserRequest, validate_create

# String fields an update may overwrite; empty values are ignored.
_PATCHABLE_TEXT_FIELDS = ("first_name", "last_name", "phone_number")


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    # -- Reads -------------------------------------------------------------

    def list(self) -> List[User]:
        """Every user, oldest first.  The password column is not loaded."""
        return self.db.query(User).order_by(User.created_at, User.username).all()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_username_with_password(self, username: str) -> Optional[User]:
        """Login lookup – the only query that loads the password digest."""
        return (
            self.db.query(User)
            .options(undefer(User.password))
            .filter(User.username == username)
            .first()
        )

    # -- Writes ------------------------------------------------------------

    def prepare_for_persistence(self, user: User, password: Optional[str] = None) -> User:
        """
        Replace a plaintext *password* with its digest on *user*.

        With no password the row's stored digest is left untouched.
        """
        if password:
            user.password = hash_password(password)
        return user

    def create(self, **fields) -> User:
        """
        Validate, check uniqueness, hash and insert a new user.

        Raises
        ------
        UserValidationError  a field breaks the rule set
        UserConflictError    username or email already taken
        """
        data = validate_create(fields)

        existing = (
            self.db.query(User)
            .filter(or_(User.username == data.username, User.email == data.email))
            .first()
        )
        if existing:
            raise UserConflictError()

        user = User(
            username=data.username,
            email=data.email,
            role=data.role,
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
        )
        self.prepare_for_persistence(user, data.password)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info("user created id=%s username=%s role=%s", user.id, user.username, user.role.value)
        return user

    def update(self, user_id: str, **patch) -> User:
        """
        Apply a partial patch.  Text fields are overwritten only when given a
        non-empty value; ``is_active`` is applied whenever it is not ``None``.

        Raises UserNotFoundError when no row has *user_id*.
        """
        changes = UpdateUserRequest(**patch)
        user = self.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        for field in _PATCHABLE_TEXT_FIELDS:
            value = getattr(changes, field)
            if value:
                setattr(user, field, value)
        if changes.is_active is not None:
            user.is_active = changes.is_active

        self.prepare_for_persistence(user)
        self._commit()
        self.db.refresh(user)
        logger.info("user updated id=%s", user.id)
        return user

    def delete(self, user_id: str) -> bool:
        """Hard delete.  Returns True when a row was actually removed."""
        affected = self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        self.db.commit()
        if affected:
            logger.info("user deleted id=%s", user_id)
        return affected > 0

    # -- Internal ----------------------------------------------------------

    def _commit(self) -> None:
        """
        Commit, translating a unique-constraint violation into a conflict.
        Two concurrent creates can both pass the pre-check; the database
        rejects the second one here.
        """
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise UserConflictError() from exc
