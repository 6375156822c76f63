"""
================================================================================
FILE: hpcadmin/api/main.py
================================================================================

PURPOSE:
    Compose the route tree and wrap it in a FastAPI application.

ROUTE TREE:
    /admin           → admin_router()        (no context dependency)
    /api/v1/users    → users_router(ctx)
    /api/v1/pirgs    → pirgs_router(ctx)

WORKFLOW:
    1. Caller binds the database engine into a Context (bind_connection)
    2. compose_router(ctx) builds each sub-router from that context
    3. create_app(ctx) adds middleware + exception handlers and mounts the tree

KEY FACTS:
    - Composition performs no I/O; the engine was verified during startup
    - Sub-routers share nothing but the read-only engine reference
    - Namespaces are disjoint path prefixes
    - JSONResponse is the default response class
    - Errors are returned as JSON with the request ID, never a traceback

TESTING ENVIRONMENT:
    - Bind an in-memory SQLite engine and pass the context to create_app
    - Use fastapi.testclient.TestClient against the returned app
"""

import logging
import time

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from hpcadmin.api.admin import admin_router
from hpcadmin.api.pirgs import pirgs_router
from hpcadmin.api.users import users_router
from hpcadmin.config.constants import (
    ADMIN_PREFIX,
    API_PREFIX,
    API_TITLE,
    PIRGS_PREFIX,
    SERVICE_VERSION,
    USERS_PREFIX,
)
from hpcadmin.core.context import Context
from hpcadmin.core.exceptions import HPCAdminException
from hpcadmin.utils import generate_request_id

logger = logging.getLogger(__name__)

# =========================================================================
# ROUTE TREE
# =========================================================================

def api_router(ctx: Context) -> APIRouter:
    """Versioned API namespace: users and pirgs."""
    router = APIRouter()
    router.include_router(users_router(ctx), prefix=USERS_PREFIX)
    router.include_router(pirgs_router(ctx), prefix=PIRGS_PREFIX)
    return router


def compose_router(ctx: Context) -> APIRouter:
    """Root route tree with the admin and versioned API namespaces."""
    root = APIRouter()
    root.include_router(admin_router(), prefix=ADMIN_PREFIX)
    root.include_router(api_router(ctx), prefix=API_PREFIX)
    return root

# =========================================================================
# APPLICATION
# =========================================================================

def create_app(ctx: Context) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        ctx: Context carrying the bound database engine

    Returns:
        FastAPI: Configured application ready to serve

    Raises:
        MissingDependencyError: ctx has no database engine bound
    """
    app = FastAPI(
        title=API_TITLE,
        description="Administration API for HPC users and pirgs",
        version=SERVICE_VERSION,
        default_response_class=JSONResponse,
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================
    @app.exception_handler(HPCAdminException)
    async def hpcadmin_exception_handler(request: Request, exc: HPCAdminException):
        """Map domain exceptions to JSON errors."""
        request_id = getattr(request.state, "request_id", "unknown")
        status_code = getattr(exc, "status_code", 500)
        if status_code >= 500:
            logger.error(f"Server error [request_id={request_id}]: {exc}")
        else:
            logger.info(f"Request rejected [request_id={request_id}]: {exc}")
        body = exc.to_dict()
        body["request_id"] = request_id
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            f"Unexpected error [request_id={request_id}]: {str(exc)}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "error_code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "request_id": request_id,
            },
        )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================
    @app.middleware("http")
    async def log_requests_middleware(request: Request, call_next):
        """Log method, path, status and latency for every request."""
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} "
            f"({elapsed_ms:.1f}ms) [request_id={getattr(request.state, 'request_id', 'unknown')}]"
        )
        return response

    # Registered last so it runs first and the logger sees the request ID.
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Add unique request ID for correlation tracking."""
        request.state.request_id = request.headers.get("X-Request-ID") or generate_request_id()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    # =========================================================================
    # ROUTES
    # =========================================================================
    app.include_router(compose_router(ctx))

    return app
