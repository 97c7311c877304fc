# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application factory.

Responsibilities
----------------
* Build the engine and session factory from the settings and keep them on
  ``app.state`` (no module-level data source).
* Create the ``users`` table on startup.  A database that cannot be
  initialised is fatal: the error is logged and the process exits.
* Register CORS and request-logging middleware.
* Mount the GraphQL router at /graphql and write the schema SDL to disk.
* Expose a /health endpoint for container liveness checks.

Run with ``python backend/main.py`` or
``uvicorn main:create_app --factory --app-dir backend``.
"""

import sys
import time
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError

from core.config import Settings, get_settings
from core.logger import logger
from database import init_db, make_engine, make_session_factory
from users.router import build_graphql_router, emit_schema_file


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Logs every inbound request: method, path, client IP, status, latency.
# Request bodies (which carry passwords for login/createUser) are NOT
# echoed – only the URL and metadata are recorded.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="User Service", version="1.0.0")

    # -----------------------------------------------------------------------
    # Storage
    # -----------------------------------------------------------------------
    try:
        engine = make_engine(settings.database_url)
        if settings.auto_create_schema:
            init_db(engine)
    except SQLAlchemyError:
        logger.exception("Error during database initialisation – exiting")
        sys.exit(1)
    logger.info("Data source initialised (%s)", engine.url.render_as_string(hide_password=True))

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(_RequestLogMiddleware)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(build_graphql_router(graphiql=settings.graphiql), prefix="/graphql")

    @app.on_event("startup")
    async def _on_startup():
        emit_schema_file(settings.schema_file)
        logger.info("User service starting up on port %d", settings.port)
        logger.info("GraphQL endpoint: http://localhost:%d/graphql", settings.port)

    @app.on_event("shutdown")
    async def _on_shutdown():
        engine.dispose()
        logger.info("User service shutting down")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
