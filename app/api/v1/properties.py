"""Properties API router: public catalog in the display language, admin CRUD.
/api/v1/properties"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import DisplayLanguage, RequireApiKey, get_db
from app.api.responses import ok
from app.schemas.base_schema import ApiResponse
from app.schemas.display_schema import DisplayProperty
from app.schemas.property_schema import (
    PaginatedResponse,
    PropertyCreate,
    PropertyRead,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
)
from app.services import property_service
from app.services.display_service import render_property

router = APIRouter()


@router.get("", response_model=ApiResponse[PaginatedResponse])
async def list_properties(
    request: Request,
    language: DisplayLanguage,
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None),
    property_type: Optional[PropertyType] = Query(None),
    status: Optional[PropertyStatus] = Query(None),
    governorate: Optional[str] = Query(None),
    price_min: Optional[float] = Query(None, ge=0),
    price_max: Optional[float] = Query(None, ge=0),
    is_featured: Optional[bool] = Query(None),
    sort_by: str = Query("created_at", enum=list(property_service.SORT_FIELDS.keys())),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """List properties with filtering, sorting and pagination, rendered for one language."""
    properties, total = await property_service.list_properties(
        db,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        property_type=property_type.value if property_type else None,
        status=status.value if status else None,
        governorate=governorate,
        price_min=price_min,
        price_max=price_max,
        is_featured=is_featured,
    )

    return ok(
        PaginatedResponse(
            items=[render_property(p, language) for p in properties],
            total=total,
            page=page,
            page_size=page_size,
            pages=math.ceil(total / page_size) if total > 0 else 0,
        ),
        "Properties listed successfully",
        request,
    )


@router.get("/featured", response_model=ApiResponse[list[DisplayProperty]])
async def featured_properties(
    request: Request,
    language: DisplayLanguage,
    db: AsyncSession = Depends(get_db),
    limit: int = Query(property_service.HOME_PAGE_LIMIT, ge=1, le=50),
):
    properties = await property_service.featured_properties(db, limit)
    return ok([render_property(p, language) for p in properties], "Featured properties retrieved", request)


@router.get("/recent", response_model=ApiResponse[list[DisplayProperty]])
async def recent_properties(
    request: Request,
    language: DisplayLanguage,
    db: AsyncSession = Depends(get_db),
    limit: int = Query(property_service.HOME_PAGE_LIMIT, ge=1, le=50),
):
    properties = await property_service.recent_properties(db, limit)
    return ok([render_property(p, language) for p in properties], "Recent properties retrieved", request)


@router.get("/{property_id}", response_model=ApiResponse[DisplayProperty])
async def get_property(
    property_id: str,
    request: Request,
    language: DisplayLanguage,
    db: AsyncSession = Depends(get_db),
):
    """A single property resolved for the display language."""
    prop = await property_service.get_property(db, property_id)
    return ok(render_property(prop, language), "Property retrieved successfully", request)


@router.get("/{property_id}/raw", response_model=ApiResponse[PropertyRead], dependencies=[RequireApiKey])
async def get_property_raw(property_id: str, request: Request, db: AsyncSession = Depends(get_db)):
    """The stored record with both language variants, for the admin editor."""
    prop = await property_service.get_property(db, property_id)
    return ok(PropertyRead.model_validate(prop), "Property retrieved successfully", request)


@router.post("", response_model=ApiResponse[PropertyRead], status_code=201, dependencies=[RequireApiKey])
async def create_property(payload: PropertyCreate, request: Request, db: AsyncSession = Depends(get_db)):
    prop = await property_service.create_property(db, payload)
    return ok(PropertyRead.model_validate(prop), "Property created successfully", request)


@router.patch("/{property_id}", response_model=ApiResponse[PropertyRead], dependencies=[RequireApiKey])
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Partial update; only the supplied fields are validated and written."""
    prop = await property_service.update_property(db, property_id, payload)
    return ok(PropertyRead.model_validate(prop), "Property updated successfully", request)


@router.delete("/{property_id}", response_model=ApiResponse[dict], dependencies=[RequireApiKey])
async def delete_property(property_id: str, request: Request, db: AsyncSession = Depends(get_db)):
    await property_service.delete_property(db, property_id)
    return ok({"id": property_id}, "Property deleted successfully", request)


@router.post("/{property_id}/media", response_model=ApiResponse[PropertyRead], dependencies=[RequireApiKey])
async def upload_media(
    property_id: str,
    request: Request,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    """Upload one image or video; its public URL is appended to the property."""
    content = await file.read()
    prop = await property_service.add_media(db, property_id, file.filename or "", content)
    return ok(PropertyRead.model_validate(prop), "Media uploaded successfully", request)
