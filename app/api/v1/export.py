"""Export API router: download properties as CSV, JSON, or Excel. /api/v1/export

Rows are read inside the request's session and then serialized, so the
download does not depend on the session outliving the handler.
Mounted with RequireApiKey in app.main.
"""
import csv
import io
import json
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.core.logging import get_logger
from app.models.property_model import Property
from app.schemas.property_schema import PropertyStatus, PropertyType
from app.services.property_service import apply_filters

router = APIRouter()
logger = get_logger(__name__)

# openpyxl keeps the whole workbook in memory
_EXCEL_MAX_ROWS = 5_000

EXPORT_COLUMNS = [
    "id",
    "title", "title_en", "title_ar",
    "description", "description_en", "description_ar",
    "location", "location_en", "location_ar",
    "features", "features_en", "features_ar",
    "property_type", "status", "governorate",
    "area", "land_area", "building_area", "total_area",
    "bedrooms", "bathrooms", "floor", "floors", "parking",
    "apartments", "rooms", "studios", "view",
    "price", "currency", "contact_for_price",
    "images", "videos",
    "is_featured", "contact_phone", "contact_email",
    "created_at", "updated_at",
]

_LIST_COLUMNS = ("features", "features_en", "features_ar", "images", "videos")


def _build_export_query(**kwargs):
    return apply_filters(select(Property), **kwargs).order_by(Property.created_at.desc())


def _property_to_dict(prop: Property) -> dict:
    """Flat dict for export; timestamps as ISO strings."""
    row = {column: getattr(prop, column) for column in EXPORT_COLUMNS}
    for column in ("created_at", "updated_at"):
        row[column] = row[column].isoformat() if row[column] else None
    return row


def _flatten(row: dict) -> dict:
    """Spreadsheet cells cannot hold lists; join them with ' | '."""
    flat = dict(row)
    for column in _LIST_COLUMNS:
        if isinstance(flat.get(column), list):
            flat[column] = " | ".join(str(v) for v in flat[column])
    return flat


def _csv_rows(rows: List[dict]) -> Iterator[str]:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    yield output.getvalue()
    output.seek(0)
    output.truncate(0)

    for row in rows:
        writer.writerow(_flatten(row))
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)


def _json_rows(rows: List[dict]) -> Iterator[str]:
    yield "[\n"
    for i, row in enumerate(rows):
        prefix = "" if i == 0 else ",\n"
        yield prefix + json.dumps(row, ensure_ascii=False)
    yield "\n]"


async def _load_rows(db: AsyncSession, limit: Optional[int] = None, **filters) -> List[dict]:
    query = _build_export_query(**filters)
    if limit:
        query = query.limit(limit)
    properties = (await db.execute(query)).scalars().all()
    logger.info("Exporting %d properties", len(properties))
    return [_property_to_dict(p) for p in properties]


def _filters(
    property_type: Optional[PropertyType] = Query(None),
    status: Optional[PropertyStatus] = Query(None),
    governorate: Optional[str] = Query(None),
    price_min: Optional[float] = Query(None, ge=0),
    price_max: Optional[float] = Query(None, ge=0),
    is_featured: Optional[bool] = Query(None),
) -> dict:
    return {
        "property_type": property_type.value if property_type else None,
        "status": status.value if status else None,
        "governorate": governorate,
        "price_min": price_min,
        "price_max": price_max,
        "is_featured": is_featured,
    }


@router.get("/csv")
async def export_csv(db: AsyncSession = Depends(get_db), filters: dict = Depends(_filters)):
    """Export filtered properties as CSV; list columns are joined with ' | '."""
    rows = await _load_rows(db, **filters)
    return StreamingResponse(
        _csv_rows(rows),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=properties_export.csv"},
    )


@router.get("/json")
async def export_json(db: AsyncSession = Depends(get_db), filters: dict = Depends(_filters)):
    """Export filtered properties as a JSON array, a full backup of the stored records."""
    rows = await _load_rows(db, **filters)
    return StreamingResponse(
        _json_rows(rows),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=properties_export.json"},
    )


@router.get("/excel")
async def export_excel(db: AsyncSession = Depends(get_db), filters: dict = Depends(_filters)):
    """Export filtered properties as Excel (.xlsx), capped at 5000 rows."""
    rows = await _load_rows(db, limit=_EXCEL_MAX_ROWS, **filters)

    wb = Workbook()
    ws = wb.active
    ws.title = "Properties"

    if rows:
        ws.append(EXPORT_COLUMNS)

        bold_font = Font(bold=True)
        for cell in ws[1]:
            cell.font = bold_font

        for row in rows:
            flat = _flatten(row)
            ws.append([flat[column] for column in EXPORT_COLUMNS])

        for i, column_cells in enumerate(ws.columns, 1):
            max_length = max((len(str(cell.value)) for cell in column_cells if cell.value is not None), default=0)
            ws.column_dimensions[get_column_letter(i)].width = min(max_length + 2, 50)

        if len(rows) == _EXCEL_MAX_ROWS:
            ws.append([f"[Truncated to {_EXCEL_MAX_ROWS} rows. Use /csv or /json for a full export.]"])
    else:
        ws.append(["No data found"])

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)

    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=properties_export.xlsx"},
    )
