"""API dependencies: database session, admin authentication, display language.

Admin endpoints (writes, raw records, exports) require the X-API-Key header;
the public catalog is open. The key is configured via API_KEY in .env.
"""
import secrets
from typing import AsyncGenerator, Annotated, Optional

from fastapi import Depends, HTTPException, Query, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session_factory
from app.schemas.property_schema import Language
from app.services.language_service import LanguageService, get_language_service


# ---------------------------------------------------------------------------
# Database session dependency
# ---------------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session for request scope."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ---------------------------------------------------------------------------
# API Key authentication
# ---------------------------------------------------------------------------

_api_key_header = APIKeyHeader(
    name="X-API-Key",
    auto_error=False,  # False so we return a custom 401 instead of 403
    description="Admin API key, configured via API_KEY in .env",
)


async def verify_api_key(
    api_key: Annotated[str | None, Security(_api_key_header)],
) -> str:
    """Validate the X-API-Key header with a constant-time comparison.

    Raises:
        HTTPException 401: key missing or wrong.
        HTTPException 500: API_KEY not configured on the server.
    """
    if not settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server is not configured correctly (API_KEY missing).",
        )

    if not api_key or not secrets.compare_digest(api_key, settings.api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key. Use the X-API-Key header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key


# Shorthand for router/endpoint dependencies
RequireApiKey = Depends(verify_api_key)


# ---------------------------------------------------------------------------
# Display language
# ---------------------------------------------------------------------------

def language_service() -> LanguageService:
    return get_language_service()


LanguageServiceDep = Annotated[LanguageService, Depends(language_service)]


def display_language(
    service: LanguageServiceDep,
    lang: Optional[Language] = Query(None, description="Display language; defaults to the current language"),
) -> Language:
    """Explicit ?lang= wins, otherwise the process-wide current language."""
    return lang or service.get_language()


DisplayLanguage = Annotated[Language, Depends(display_language)]
