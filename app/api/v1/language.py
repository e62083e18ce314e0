"""Language API router: the process-wide display language. /api/v1/language"""
from fastapi import APIRouter, Request

from app.api.deps import LanguageServiceDep
from app.api.responses import ok
from app.schemas.base_schema import ApiResponse
from app.schemas.language_schema import LanguageRead, LanguageUpdate
from app.services.language_service import LanguageState

router = APIRouter()


def _read(state: LanguageState) -> LanguageRead:
    return LanguageRead(language=state.language, is_rtl=state.is_rtl, direction=state.direction)


@router.get("", response_model=ApiResponse[LanguageRead])
async def get_language(request: Request, service: LanguageServiceDep):
    return ok(_read(service.state), "Current language", request)


@router.put("", response_model=ApiResponse[LanguageRead])
def set_language(payload: LanguageUpdate, request: Request, service: LanguageServiceDep):
    """Set the language; subscribers are notified even when it is unchanged."""
    state = service.set_language(payload.language)
    return ok(_read(state), "Language updated", request)


@router.post("/toggle", response_model=ApiResponse[LanguageRead])
def toggle_language(request: Request, service: LanguageServiceDep):
    service.toggle_language()
    return ok(_read(service.state), "Language toggled", request)
