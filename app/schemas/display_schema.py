"""Pydantic schemas for resolved, language-specific property views."""
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class DisplayField(BaseModel):
    key: str
    label: str
    value: Union[int, float, str]
    icon: Optional[str] = None


class PropertyDisplayInfo(BaseModel):
    primary_fields: List[DisplayField] = []
    secondary_fields: List[DisplayField] = []


class DisplayProperty(BaseModel):
    """A property resolved for one display language. Never persisted."""

    id: Optional[str] = None
    language: str

    title: str = ""
    description: str = ""
    location: str = ""
    features: List[str] = []

    property_type: Optional[str] = None
    property_type_display: Optional[str] = None
    status: Optional[str] = None
    status_display: Optional[str] = None
    governorate: Optional[str] = None
    governorate_display: Optional[str] = None

    price_display: Optional[str] = None
    area_display: Optional[str] = None
    contact_for_price: bool = False

    content_language: str = Field("en", description="Detected language of the resolved title")
    language_indicator: Optional[str] = Field(
        None,
        description="Glyph shown when the content language differs from the display language",
    )

    cover_image: Optional[str] = None
    images: List[str] = []
    videos: List[str] = []
    is_featured: bool = False

    primary_fields: List[DisplayField] = []
    secondary_fields: List[DisplayField] = []


class ContentQualityReport(BaseModel):
    has_issues: bool
    issues: List[str] = []
    suggestions: List[str] = []
    score: int = Field(..., ge=0, le=100)


class ContentGuidelines(BaseModel):
    title: str
    tips: List[str]
    good_title: str
    good_description: str
    good_location: str


class FormField(BaseModel):
    key: str
    label: str
    kind: str = Field(..., description="count or area")
    required: bool = False


class FormSchema(BaseModel):
    """Which inputs the admin form shows and requires for one property type."""

    property_type: str
    label: str
    fields: List[FormField]
    required: List[str]
