"""Validation service: admin input checks, sanitization, upload rules.

validate_property_data() returns every failed rule so the admin console can
show them together; callers raise ValidationError when the list is non-empty.
Type-specific required numeric fields come from the field schema, the same
table the display uses.
"""
import re
import secrets
import time
from pathlib import PurePath
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from app.config import settings
from app.schemas.property_schema import Currency, PropertyStatus, PropertyType
from app.services.field_schema import FIELD_SPECS, AREA, get_type_schema
from app.services.lebanese_service import LEBANESE_GOVERNORATES, validate_lebanese_phone

MAX_INPUT_LENGTH = 1000

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp")
VIDEO_EXTENSIONS = ("mp4", "webm", "mov")
MAX_IMAGE_SIZE = 5 * 1024 * 1024
MAX_VIDEO_SIZE = 50 * 1024 * 1024

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_EVENT_HANDLER_PATTERN = re.compile(r"on\w+=", re.IGNORECASE)
_JS_PROTOCOL_PATTERN = re.compile(r"javascript:", re.IGNORECASE)

_COUNT_FIELDS = ("bedrooms", "bathrooms", "floor", "floors", "parking", "apartments", "rooms", "studios")


def sanitize_input(value: Any) -> str:
    """Trim and strip markup/script fragments from free text."""
    if not isinstance(value, str):
        return ""
    cleaned = value.strip()
    cleaned = cleaned.replace("<", "").replace(">", "")
    cleaned = _JS_PROTOCOL_PATTERN.sub("", cleaned)
    cleaned = _EVENT_HANDLER_PATTERN.sub("", cleaned)
    return cleaned[:MAX_INPUT_LENGTH]


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and len(email) <= 255 and bool(_EMAIL_PATTERN.match(email))


def _has_text(data: Mapping[str, Any], field: str) -> bool:
    """A text field is present as the single value or as both bilingual variants."""
    def filled(key: str) -> bool:
        value = data.get(key)
        return isinstance(value, str) and bool(value.strip())

    return filled(field) or (filled(f"{field}_en") and filled(f"{field}_ar"))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_property_data(data: Mapping[str, Any], partial: bool = False) -> List[str]:
    """Check an admin payload. With partial=True only the supplied keys are checked."""
    errors: List[str] = []

    def supplied(key: str) -> bool:
        return not partial or key in data

    for field in ("title", "description", "location"):
        if not partial:
            if not _has_text(data, field):
                errors.append(f"{field.capitalize()} is required")
        elif field in data and not _has_text(data, field):
            errors.append(f"{field.capitalize()} cannot be empty")

    if supplied("contact_phone") and not validate_lebanese_phone(data.get("contact_phone")):
        errors.append("Valid Lebanese phone number is required")
    if supplied("contact_email") and not validate_email(data.get("contact_email")):
        errors.append("Valid email address is required")

    price = data.get("price")
    if price is not None and (not _is_number(price) or price < 0):
        errors.append("Price must be a positive number")

    area = data.get("area")
    if area is not None and (not _is_number(area) or area < 0):
        errors.append("Area must be a positive number")

    for field in _COUNT_FIELDS:
        value = data.get(field)
        if value is not None and (not _is_number(value) or value < 0):
            errors.append(f"{FIELD_SPECS[field].label_en} must be a non-negative number")

    property_type = data.get("property_type")
    valid_types = [t.value for t in PropertyType]
    if supplied("property_type") and property_type not in valid_types:
        errors.append("Invalid property type")

    status = data.get("status")
    if supplied("status") and status not in [s.value for s in PropertyStatus]:
        errors.append("Invalid status")

    governorate = data.get("governorate")
    if governorate and governorate not in LEBANESE_GOVERNORATES:
        errors.append("Invalid governorate")

    currency = data.get("currency")
    if currency is not None and currency not in [c.value for c in Currency]:
        errors.append("Invalid currency")

    images = data.get("images")
    if isinstance(images, Sequence) and len(images) > settings.max_images:
        errors.append(f"Maximum {settings.max_images} images allowed")
    videos = data.get("videos")
    if isinstance(videos, Sequence) and len(videos) > settings.max_videos:
        errors.append(f"Maximum {settings.max_videos} videos allowed")

    if not partial and property_type in valid_types:
        for key in get_type_schema(property_type).required_keys:
            value = data.get(key)
            if not _is_number(value) or not value > 0:
                unit = " (m²)" if FIELD_SPECS[key].kind == AREA else ""
                errors.append(f"{FIELD_SPECS[key].label_en}{unit} is required for this property type")

    return errors


def _extension(filename: str) -> str:
    suffix = PurePath(filename or "").suffix
    return suffix[1:].lower() if suffix else ""


def validate_file_type(filename: str, allowed: Sequence[str]) -> bool:
    ext = _extension(filename)
    return bool(ext) and ext in allowed


def validate_file_size(size: int, max_size: int) -> bool:
    return size <= max_size


def validate_image_file(filename: str, size: int) -> Tuple[bool, Optional[str]]:
    if not validate_file_type(filename, IMAGE_EXTENSIONS):
        return False, "Invalid file type. Only JPG, PNG, and WebP are allowed."
    if not validate_file_size(size, MAX_IMAGE_SIZE):
        return False, "File too large. Maximum size is 5MB."
    return True, None


def validate_video_file(filename: str, size: int) -> Tuple[bool, Optional[str]]:
    if not validate_file_type(filename, VIDEO_EXTENSIONS):
        return False, "Invalid file type. Only MP4, WebM, and MOV are allowed."
    if not validate_file_size(size, MAX_VIDEO_SIZE):
        return False, "File too large. Maximum size is 50MB."
    return True, None


def media_kind(filename: str) -> Optional[str]:
    """'image', 'video' or None, by extension."""
    ext = _extension(filename)
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return None


def secure_filename(filename: str) -> str:
    """Replace the client's filename with '<timestamp>_<random>.<ext>'."""
    ext = _extension(filename)
    name = f"{int(time.time() * 1000)}_{secrets.token_hex(6)}"
    return f"{name}.{ext}" if ext else name
