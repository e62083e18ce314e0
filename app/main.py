"""FastAPI application factory and startup configuration.

Public routers (catalog, language, contact) are open; admin routers are
mounted with `dependencies=[RequireApiKey]`, and the admin endpoints inside the
properties router carry the dependency per route. /health and /docs stay public.
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.core.exceptions import (
    AppException,
    LanguageStorageError,
    MediaStorageError,
    NotFoundError,
    UnsupportedLanguageError,
    ValidationError,
)
from app.core.logging import get_logger, set_correlation_id, setup_logging
from app.core.rate_limit import limiter
from app.api.v1.admin import router as admin_router
from app.api.v1.contact import router as contact_router
from app.api.v1.export import router as export_router
from app.api.v1.language import router as language_router
from app.api.v1.properties import router as properties_router
from app.api.deps import RequireApiKey
from app.api.responses import error, ok
from app.services.language_service import get_language_service

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    setup_logging()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    if not settings.api_key:
        logger.warning("API_KEY is not set; admin endpoints will answer 500 until it is configured.")

    if settings.create_tables_on_startup:
        from app import models  # noqa: F401  (registers the tables)
        from app.database import Base, engine

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    service = get_language_service()
    logger.info("Display language is '%s'", service.get_language().value, extra={"language": service.get_language().value})

    yield

    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Bilingual (English/Arabic) real estate catalog for Lebanon: listings, contact form and admin console.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.limiter = limiter

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def add_trace_id(request: Request, call_next):
        request.state.trace_id = set_correlation_id(request.headers.get("X-Trace-Id"))
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Trace-Id"] = request.state.trace_id
        response.headers["Content-Language"] = get_language_service().document.lang
        logger.debug(
            "%s %s",
            request.method,
            request.url.path,
            extra={"status": response.status_code, "duration": round(time.perf_counter() - start, 4)},
        )
        return response

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        trace_id = getattr(request.state, "trace_id", None)
        logger.exception("Unhandled exception [trace_id=%s]", trace_id, exc_info=exc)
        return error(500, "Internal server error", request)

    @application.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error(404, exc.message, request)

    @application.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return error(422, exc.message, request, exc.errors)

    @application.exception_handler(UnsupportedLanguageError)
    async def unsupported_language_handler(request: Request, exc: UnsupportedLanguageError):
        return error(422, exc.message, request)

    @application.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning("Rate limit exceeded: %s", exc.detail, extra={"client": request.client.host if request.client else None})
        return error(429, "Too many requests. Please try again later.", request)

    @application.exception_handler(LanguageStorageError)
    @application.exception_handler(MediaStorageError)
    async def storage_handler(request: Request, exc: AppException):
        logger.error("%s: %s", exc.message, exc.detail)
        return error(500, exc.message, request)

    _auth = [RequireApiKey]

    application.include_router(properties_router, prefix="/api/v1/properties", tags=["properties"])
    application.include_router(language_router, prefix="/api/v1/language", tags=["language"])
    application.include_router(contact_router, prefix="/api/v1/contact", tags=["contact"])
    application.include_router(admin_router, prefix="/api/v1/admin", tags=["admin"], dependencies=_auth)
    application.include_router(export_router, prefix="/api/v1/export", tags=["export"], dependencies=_auth)

    application.mount(
        settings.media_base_url,
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )

    @application.get("/health", tags=["system"])
    async def health_check(request: Request):
        from sqlalchemy import text
        from app.database import async_session_factory

        db_status = "ok"
        try:
            async with async_session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            db_status = f"error: {str(e)}"

        return ok(
            {
                "status": "healthy" if db_status == "ok" else "unhealthy",
                "version": settings.app_version,
                "database": db_status,
                "language": get_language_service().get_language().value,
            },
            "Health check completed",
            request,
        )

    return application


app = create_app()
