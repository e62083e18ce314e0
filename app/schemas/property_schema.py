"""Property schemas: the validated record the presentation engine consumes,
plus the admin create/update/read shapes.

PropertyRecord is the boundary type: everything coming out of the database or
an API payload is turned into one before it reaches the display code. It is
lenient per field: a number, flag or timestamp that cannot be parsed becomes
None (or False) on its own and the rest of the record survives, so the
presentation functions never have to guard against malformed input.
PropertyCreate/PropertyUpdate are strict and used only on writes.
"""
import math
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class Language(str, Enum):
    EN = "en"
    AR = "ar"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    VILLA = "villa"
    BUILDING = "building"
    HOTEL = "hotel"
    OFFICE = "office"
    LAND = "land"


class PropertyStatus(str, Enum):
    FOR_SALE = "for_sale"
    FOR_RENT = "for_rent"
    SOLD = "sold"
    RENTED = "rented"


class Currency(str, Enum):
    USD = "USD"
    LBP = "LBP"


INT_ATTRIBUTES = ("bedrooms", "bathrooms", "floor", "floors", "parking", "apartments", "rooms", "studios")
AREA_ATTRIBUTES = ("area", "land_area", "building_area", "total_area")
NUMERIC_ATTRIBUTES = AREA_ATTRIBUTES + INT_ATTRIBUTES

_TRUE_STRINGS = {"true", "1", "yes", "on"}


def _lenient_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip().replace(",", ""))
        else:
            return None
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _lenient_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _lenient_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _lenient_str_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return None


class PropertyRecord(BaseModel):
    """A raw property as stored by the backend, checked at the boundary."""
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: Optional[str] = None

    title: str = ""
    description: str = ""
    location: str = ""
    features: List[str] = []

    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    location_en: Optional[str] = None
    location_ar: Optional[str] = None
    features_en: Optional[List[str]] = None
    features_ar: Optional[List[str]] = None

    property_type: Optional[str] = None
    status: Optional[str] = None
    governorate: Optional[str] = None

    area: Optional[float] = None
    land_area: Optional[float] = None
    building_area: Optional[float] = None
    total_area: Optional[float] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    floor: Optional[float] = None
    floors: Optional[float] = None
    parking: Optional[float] = None
    apartments: Optional[float] = None
    rooms: Optional[float] = None
    studios: Optional[float] = None
    view: Optional[str] = None

    price: Optional[float] = None
    currency: str = Currency.USD.value
    contact_for_price: bool = False

    images: List[str] = []
    videos: List[str] = []

    is_featured: bool = False
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v) if v is not None else None

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def _text_or_empty(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator(
        "title_en", "title_ar", "description_en", "description_ar",
        "location_en", "location_ar", "governorate", "view",
        "property_type", "status", "contact_phone", "contact_email",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, v):
        return v if isinstance(v, str) else None

    @field_validator(*NUMERIC_ATTRIBUTES, "price", mode="before")
    @classmethod
    def _numbers(cls, v):
        return _lenient_number(v)

    @field_validator("features", "images", "videos", mode="before")
    @classmethod
    def _lists(cls, v):
        return _lenient_str_list(v) or []

    @field_validator("features_en", "features_ar", mode="before")
    @classmethod
    def _optional_lists(cls, v):
        return _lenient_str_list(v)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, v):
        return v.upper() if isinstance(v, str) and v.strip() else Currency.USD.value

    @field_validator("contact_for_price", "is_featured", mode="before")
    @classmethod
    def _flags(cls, v):
        return _lenient_flag(v)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, v):
        return _lenient_datetime(v)


def as_record(obj: Union[PropertyRecord, Mapping[str, Any], Any]) -> PropertyRecord:
    """Coerce a mapping or ORM row into a PropertyRecord.

    Malformed fields are dropped one by one by the validators above. Input
    that is not a mapping or an object with attributes degrades to an empty
    record.
    """
    if isinstance(obj, PropertyRecord):
        return obj
    try:
        if isinstance(obj, Mapping):
            return PropertyRecord.model_validate(dict(obj))
        return PropertyRecord.model_validate(obj, from_attributes=True)
    except ValidationError:
        return PropertyRecord()


class PropertyBase(BaseModel):
    """Shared fields for create and update."""
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=500)
    features: List[str] = []

    title_en: Optional[str] = Field(None, max_length=500)
    title_ar: Optional[str] = Field(None, max_length=500)
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    location_en: Optional[str] = Field(None, max_length=500)
    location_ar: Optional[str] = Field(None, max_length=500)
    features_en: Optional[List[str]] = None
    features_ar: Optional[List[str]] = None

    property_type: str = PropertyType.APARTMENT.value
    status: str = PropertyStatus.FOR_SALE.value
    governorate: Optional[str] = None

    area: Optional[float] = Field(None, ge=0)
    land_area: Optional[float] = Field(None, ge=0)
    building_area: Optional[float] = Field(None, ge=0)
    total_area: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    floor: Optional[int] = Field(None, ge=0)
    floors: Optional[int] = Field(None, ge=0)
    parking: Optional[int] = Field(None, ge=0)
    apartments: Optional[int] = Field(None, ge=0)
    rooms: Optional[int] = Field(None, ge=0)
    studios: Optional[int] = Field(None, ge=0)
    view: Optional[str] = Field(None, max_length=255)

    price: Optional[float] = Field(None, ge=0)
    currency: str = Field(Currency.USD.value, max_length=3)
    contact_for_price: bool = False

    images: List[str] = []
    videos: List[str] = []

    is_featured: bool = False
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None


class PropertyCreate(PropertyBase):
    """Schema for creating a new property from the admin console."""
    pass


class PropertyUpdate(BaseModel):
    """Schema for partial property updates (all fields optional)."""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    features: Optional[List[str]] = None
    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    location_en: Optional[str] = None
    location_ar: Optional[str] = None
    features_en: Optional[List[str]] = None
    features_ar: Optional[List[str]] = None
    property_type: Optional[str] = None
    status: Optional[str] = None
    governorate: Optional[str] = None
    area: Optional[float] = Field(None, ge=0)
    land_area: Optional[float] = Field(None, ge=0)
    building_area: Optional[float] = Field(None, ge=0)
    total_area: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    floor: Optional[int] = Field(None, ge=0)
    floors: Optional[int] = Field(None, ge=0)
    parking: Optional[int] = Field(None, ge=0)
    apartments: Optional[int] = Field(None, ge=0)
    rooms: Optional[int] = Field(None, ge=0)
    studios: Optional[int] = Field(None, ge=0)
    view: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    contact_for_price: Optional[bool] = None
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None


class PropertyRead(PropertyBase):
    """Raw stored property, as the admin console edits it."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class PaginatedResponse(BaseModel):
    """Generic paginated response wrapper."""
    items: List[Any]
    total: int
    page: int
    page_size: int
    pages: int


class PropertyStats(BaseModel):
    """Aggregated counts for the admin dashboard."""
    total_properties: int = 0
    featured: int = 0
    by_property_type: dict[str, int] = {}
    by_status: dict[str, int] = {}
    by_governorate: dict[str, int] = {}
