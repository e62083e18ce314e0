"""Admin console API router: form schema, content quality, guidelines, stats.
/api/v1/admin

Mounted with RequireApiKey in app.main.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import DisplayLanguage, get_db
from app.api.responses import ok
from app.schemas.base_schema import ApiResponse
from app.schemas.display_schema import ContentGuidelines, ContentQualityReport, FormSchema
from app.schemas.property_schema import PropertyRecord, PropertyStats, PropertyType
from app.services.field_schema import get_form_schema
from app.services.property_service import property_stats
from app.services.translation_service import check_content_quality, get_content_guidelines

router = APIRouter()


@router.get("/form-schema", response_model=ApiResponse[list[FormSchema]])
async def list_form_schemas(request: Request, language: DisplayLanguage):
    """Visible and required numeric fields for every property type."""
    schemas = [get_form_schema(t.value, language) for t in PropertyType]
    return ok(schemas, "Form schemas retrieved", request)


@router.get("/form-schema/{property_type}", response_model=ApiResponse[FormSchema])
async def form_schema(property_type: str, request: Request, language: DisplayLanguage):
    """Unknown types get the fallback field set."""
    return ok(get_form_schema(property_type, language), "Form schema retrieved", request)


@router.post("/quality-check", response_model=ApiResponse[ContentQualityReport])
async def quality_check(record: PropertyRecord, request: Request, language: DisplayLanguage):
    report = check_content_quality(record, language)
    return ok(report, "Content quality checked", request)


@router.get("/guidelines", response_model=ApiResponse[ContentGuidelines])
async def guidelines(request: Request, language: DisplayLanguage):
    return ok(get_content_guidelines(language), "Content guidelines retrieved", request)


@router.get("/stats", response_model=ApiResponse[PropertyStats])
async def stats(request: Request, db: AsyncSession = Depends(get_db)):
    return ok(await property_stats(db), "Property stats retrieved successfully", request)
