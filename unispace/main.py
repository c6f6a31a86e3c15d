"""FastAPI application factory and the uvicorn entry point."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from unispace.config import Settings, get_settings
from unispace.domain.errors import DomainError
from unispace.domain.models import ErrorEnvelope
from unispace.logging_config import configure_logging
from unispace.repos.database import (
    build_engine,
    build_session_factory,
    init_db,
    session_scope,
)
from unispace.repos.sql import seed_database
from unispace.routes import bookings, facilities, users
from unispace.services.auth import PasswordHasher

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def _failure(status_code: int, message: str, **extra) -> JSONResponse:
    body = ErrorEnvelope(message=message, **extra).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    init_db(app.state.engine)
    if settings.seed_on_startup:
        with session_scope(app.state.session_factory) as session:
            seeded = seed_database(
                session,
                admin_email=settings.admin_email,
                admin_password_hash=app.state.password_hasher.hash(
                    settings.admin_password.get_secret_value()
                ),
            )
        if seeded:
            logger.info("Seeded admin account %s and sample facilities", settings.admin_email)
    yield
    app.state.engine.dispose()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error(_request: Request, exc: DomainError) -> JSONResponse:
        return _failure(exc.status_code, exc.message, error=exc.code)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return _failure(400, "Validation errors", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _failure(404, "Endpoint not found")
        return _failure(exc.status_code, str(exc.detail))

    @app.exception_handler(IntegrityError)
    async def _integrity_error(_request: Request, exc: IntegrityError) -> JSONResponse:
        # A concurrent writer got there first; callers may retry like any conflict.
        logger.warning("Integrity violation: %s", exc.orig)
        return _failure(409, "Request conflicts with existing data", error="conflict")

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        detail = str(exc) if app.state.settings.expose_error_detail else "Something went wrong"
        return _failure(500, "Internal server error", error=detail)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its own engine, session factory and password hasher."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="UniSpace Facility Booking API", version=API_VERSION, lifespan=_lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.password_rounds)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)
    app.include_router(facilities.router)
    app.include_router(bookings.router)
    app.include_router(users.router)

    # ── Service info ──────────────────────────────────────────────────

    @app.get("/api")
    def api_info() -> dict:
        return {
            "message": "UniSpace API - University Facility Booking System",
            "version": API_VERSION,
            "endpoints": {
                "facilities": "/api/facilities",
                "bookings": "/api/bookings",
                "users": "/api/users",
            },
        }

    @app.get("/api/health")
    def health() -> dict:
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
        }

    return app


def main() -> None:
    """Serve the API with uvicorn; the app is built lazily by the factory."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "unispace.main:create_app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        factory=True,
    )


if __name__ == "__main__":
    main()
