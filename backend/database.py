# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy declarative base, engine / session-factory constructors, and the
FastAPI dependency that provides a DB session per request.

There is no module-level engine: ``main.create_app`` builds one from the
settings and keeps the session factory on ``app.state``.
"""

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """
    Create the engine for *database_url*.

    SQLite connections are shared with the threadpool FastAPI runs sync
    dependencies in, so the same-thread check is switched off for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    # pool_pre_ping keeps idle connections alive across server-side timeouts
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create every table known to ``Base.metadata`` that does not exist yet."""
    import models.user  # noqa: F401  register the model on Base.metadata

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    """
    FastAPI dependency.  Yields a session for the duration of the request,
    then closes it.  Use with Depends(get_db).
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
