# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Mounts the GraphQL schema on FastAPI and wires the per-request context.

Every request gets its own session (``database.get_db``) and a
``UserRepository`` around it; resolvers reach both through ``info.context``.
"""

from pathlib import Path

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter

from core.logger import logger
from database import get_db
from users.repository import UserRepository
from users.resolver import schema


def get_context(request: Request, db: Session = Depends(get_db)) -> dict:
    return {
        "repository": UserRepository(db),
        "settings": request.app.state.settings,
    }


def build_graphql_router(graphiql: bool = True) -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )


def emit_schema_file(path: str) -> None:
    """Write the SDL of the schema to *path* (no-op for an empty path)."""
    if not path:
        return
    target = Path(path)
    target.write_text(schema.as_str() + "\n", encoding="utf-8")
    logger.info("GraphQL schema written to %s", target.resolve())
