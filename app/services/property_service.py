"""Property service: catalog queries and admin writes against the properties table.

Writes go through validate_property_data() and sanitize_input() before they
touch the session; reads return ORM rows that the routers turn into
PropertyRecord/DisplayProperty.
"""
from pathlib import Path
from typing import Any, Dict, List, Sequence

from sqlalchemy import and_, asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import MediaStorageError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.property_model import Property
from app.schemas.property_schema import PropertyCreate, PropertyStats, PropertyUpdate
from app.services.validation_service import (
    media_kind,
    sanitize_input,
    secure_filename,
    validate_image_file,
    validate_property_data,
    validate_video_file,
)

logger = get_logger(__name__)

_SANITIZED_FIELDS = (
    "title", "description", "location",
    "title_en", "title_ar",
    "description_en", "description_ar",
    "location_en", "location_ar",
    "view",
)

SORT_FIELDS = {
    "price": Property.price,
    "area": Property.area,
    "bedrooms": Property.bedrooms,
    "created_at": Property.created_at,
}

HOME_PAGE_LIMIT = 6

_NOT_NULL_FIELDS = ("property_type", "status", "currency", "contact_for_price", "is_featured", "features", "images", "videos")


def apply_filters(query, **kwargs):
    """Apply catalog filters to a property query."""
    filters = []

    if kwargs.get("search"):
        term = f"%{kwargs['search'].strip()}%"
        filters.append(
            or_(
                Property.title.ilike(term),
                Property.title_en.ilike(term),
                Property.title_ar.ilike(term),
                Property.location.ilike(term),
                Property.location_en.ilike(term),
                Property.location_ar.ilike(term),
            )
        )
    if kwargs.get("property_type"):
        filters.append(Property.property_type == kwargs["property_type"])
    if kwargs.get("status"):
        filters.append(Property.status == kwargs["status"])
    if kwargs.get("governorate"):
        filters.append(Property.governorate == kwargs["governorate"])
    if kwargs.get("price_min") is not None:
        filters.append(Property.price >= kwargs["price_min"])
    if kwargs.get("price_max") is not None:
        filters.append(Property.price <= kwargs["price_max"])
    if kwargs.get("is_featured") is not None:
        filters.append(Property.is_featured == kwargs["is_featured"])

    if filters:
        query = query.where(and_(*filters))

    return query


def apply_sort(query, sort_by: str = "created_at", sort_order: str = "desc"):
    column = SORT_FIELDS.get(sort_by, Property.created_at)
    return query.order_by(desc(column) if sort_order == "desc" else asc(column))


async def list_properties(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    **filters: Any,
) -> tuple[Sequence[Property], int]:
    count_query = apply_filters(select(func.count(Property.id)), **filters)
    total = (await db.execute(count_query)).scalar_one()

    query = apply_sort(apply_filters(select(Property), **filters), sort_by, sort_order)
    query = query.offset((page - 1) * page_size).limit(page_size)
    return (await db.execute(query)).scalars().all(), total


async def featured_properties(db: AsyncSession, limit: int = HOME_PAGE_LIMIT) -> Sequence[Property]:
    query = (
        select(Property)
        .where(Property.is_featured.is_(True))
        .order_by(Property.created_at.desc())
        .limit(limit)
    )
    return (await db.execute(query)).scalars().all()


async def recent_properties(db: AsyncSession, limit: int = HOME_PAGE_LIMIT) -> Sequence[Property]:
    query = select(Property).order_by(Property.created_at.desc()).limit(limit)
    return (await db.execute(query)).scalars().all()


async def get_property(db: AsyncSession, property_id: str) -> Property:
    prop = (await db.execute(select(Property).where(Property.id == property_id))).scalar_one_or_none()
    if not prop:
        raise NotFoundError(f"Property {property_id} not found")
    return prop


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    for field in _SANITIZED_FIELDS:
        if isinstance(data.get(field), str):
            data[field] = sanitize_input(data[field])
    for field in ("features", "features_en", "features_ar"):
        if isinstance(data.get(field), list):
            data[field] = [sanitize_input(f) for f in data[field] if sanitize_input(f)]
    if data.get("contact_for_price"):
        data["price"] = 0
    return data


async def create_property(db: AsyncSession, payload: PropertyCreate) -> Property:
    data = payload.model_dump()
    errors = validate_property_data(data)
    if errors:
        raise ValidationError("Property data is invalid", errors=errors)

    prop = Property(**_clean(data))
    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("Property created", extra={"property_id": prop.id})
    return prop


async def update_property(db: AsyncSession, property_id: str, payload: PropertyUpdate) -> Property:
    prop = await get_property(db, property_id)

    update_data = payload.model_dump(exclude_unset=True)
    errors = validate_property_data(update_data, partial=True)
    if errors:
        raise ValidationError("Property data is invalid", errors=errors)

    for field, value in _clean(update_data).items():
        if value is None and field in _NOT_NULL_FIELDS:
            continue
        setattr(prop, field, value)

    await db.flush()
    await db.refresh(prop)
    logger.info("Property updated", extra={"property_id": prop.id})
    return prop


async def delete_property(db: AsyncSession, property_id: str) -> None:
    prop = await get_property(db, property_id)
    await db.delete(prop)
    logger.info("Property deleted", extra={"property_id": property_id})


async def add_media(db: AsyncSession, property_id: str, filename: str, content: bytes) -> Property:
    """Validate and store an uploaded image or video, then append its URL."""
    prop = await get_property(db, property_id)

    kind = media_kind(filename)
    if kind == "image":
        valid, reason = validate_image_file(filename, len(content))
    elif kind == "video":
        valid, reason = validate_video_file(filename, len(content))
    else:
        valid, reason = False, "Unsupported media type"
    if not valid:
        raise ValidationError(reason or "Invalid media file")

    current: List[str] = list((prop.images if kind == "image" else prop.videos) or [])
    limit = settings.max_images if kind == "image" else settings.max_videos
    if len(current) >= limit:
        raise ValidationError(f"Maximum {limit} {kind}s allowed")

    stored_name = secure_filename(filename)
    target_dir = Path(settings.media_root) / property_id
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(content)
    except OSError as e:
        raise MediaStorageError("Could not store media file", detail=str(e)) from e

    url = f"{settings.media_base_url.rstrip('/')}/{property_id}/{stored_name}"
    current.append(url)
    if kind == "image":
        prop.images = current
    else:
        prop.videos = current

    await db.flush()
    await db.refresh(prop)
    logger.info("Stored %s %s", kind, stored_name, extra={"property_id": property_id})
    return prop


async def property_stats(db: AsyncSession) -> PropertyStats:
    total = (await db.execute(select(func.count(Property.id)))).scalar_one()
    featured = (await db.execute(
        select(func.count(Property.id)).where(Property.is_featured.is_(True))
    )).scalar_one()

    async def _grouped(column) -> Dict[str, int]:
        rows = (await db.execute(
            select(column, func.count(Property.id)).where(column.isnot(None)).group_by(column)
        )).all()
        return {r[0]: r[1] for r in rows}

    return PropertyStats(
        total_properties=total or 0,
        featured=featured or 0,
        by_property_type=await _grouped(Property.property_type),
        by_status=await _grouped(Property.status),
        by_governorate=await _grouped(Property.governorate),
    )
