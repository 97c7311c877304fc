# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first admin user.

Run once after the initial migration:
    python bin/seed_admin.py

The script reads FIRST_ADMIN_USERNAME, FIRST_ADMIN_EMAIL and
FIRST_ADMIN_PASSWORD from etc/app.conf.  The account goes through the same
repository write path as createUser, so it is validated and its password is
hashed before it reaches the database.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.config import Settings, get_settings               # noqa: E402
from core.logger import logger                               # noqa: E402
from database import init_db, make_engine, make_session_factory  # noqa: E402
from models.user import UserRole                             # noqa: E402
from users.errors import UserServiceError                    # noqa: E402
from users.repository import UserRepository                  # noqa: E402


def seed(settings: Settings = None) -> bool:
    """Create the admin account.  Returns True when a row was inserted."""
    settings = settings or get_settings()
    if not (settings.first_admin_username and settings.first_admin_email and settings.first_admin_password):
        logger.warning("[seed_admin] FIRST_ADMIN_* not set in etc/app.conf – nothing to do.")
        return False

    engine = make_engine(settings.database_url)
    if settings.auto_create_schema:
        init_db(engine)

    db = make_session_factory(engine)()
    try:
        repo = UserRepository(db)
        if repo.find_by_username_with_password(settings.first_admin_username):
            logger.info("[seed_admin] Admin '%s' already exists – skipping.", settings.first_admin_username)
            return False

        try:
            repo.create(
                username=settings.first_admin_username,
                email=settings.first_admin_email,
                password=settings.first_admin_password,
                role=UserRole.ADMIN,
            )
        except UserServiceError as exc:
            logger.error("[seed_admin] Could not create admin '%s': %s", settings.first_admin_username, exc)
            return False

        logger.info("[seed_admin] Admin '%s' created successfully.", settings.first_admin_username)
        return True
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    seed()
