"""
Cheese Shop API — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn cheeseshop.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────────┐ ┌────────┐  │
    │  │ GET /cheeses │ │ GET /cheeses/{id} │ │ /health│  │
    │  └──────────────┘ └───────────────────┘ └────────┘  │
    │                                                     │
    │  Error table (ERROR_RESPONSES):                     │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFoundError→404 │ DatabaseError→500        │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create tables (optional) → seed (optional)
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, Callable, Dict, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cheeseshop import __version__
from cheeseshop.config import settings
from cheeseshop.database import create_tables, dispose_engine
from cheeseshop.exceptions import CheeseShopError, DatabaseError, NotFoundError
from cheeseshop.middleware.logging import RequestLoggingMiddleware
from cheeseshop.middleware.request_id import RequestIDMiddleware, request_id_var
from cheeseshop.routes import cheeses, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request and per-query noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Create missing tables (settings.create_tables_on_startup)
        3. Insert the sample catalogue into an empty table (settings.seed_on_startup)

    Shutdown sequence:
        1. Dispose database engine (close all pooled connections)
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Cheese Shop API %s starting up...", __version__)

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")

    if settings.seed_on_startup:
        from cheeseshop.seed import seed_catalogue
        created = await seed_catalogue(if_empty=True)
        logger.info("Seeded %d cheeses", len(created))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Cheese Shop API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# Application error → (HTTP status, machine-readable error code)
ERROR_RESPONSES: Dict[Type[CheeseShopError], Tuple[int, str]] = {
    NotFoundError: (404, "not found"),
    DatabaseError: (500, "server error"),
}


def error_body(code: str) -> Dict[str, str]:
    return {"error": code}


def _app_error_handler(status_code: int, code: str) -> Callable:
    async def handle(request: Request, exc: CheeseShopError) -> JSONResponse:
        rid = request_id_var.get("")
        if status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=status_code, content=error_body(code))

    return handle


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ERROR_RESPONSES entries  → their mapped status and code
        Framework HTTPException  → its status, code from the status phrase
                                   (unknown route → "not found",
                                    wrong method → "method not allowed")
        Exception (fallback)     → 500 "server error", stack trace logged

    No handler puts internal details (stack traces, SQL) in the body.
    """
    for exc_class, (status_code, code) in ERROR_RESPONSES.items():
        app.add_exception_handler(exc_class, _app_error_handler(status_code, code))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        try:
            code = HTTPStatus(exc.status_code).phrase.lower()
        except ValueError:
            code = "http error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=error_body("server error"))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Cheese Shop API",
        description="Read-only catalogue of cheeses: list them all or fetch one by id.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(cheeses.router)
    app.include_router(health.router)

    return app


# uvicorn expects `cheeseshop.main:app` to be importable
app = create_app()
