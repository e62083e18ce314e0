"""Display service: builds the language-specific view of a property.

get_property_display_info() walks the type's row in PROPERTY_TYPE_SCHEMAS and
keeps a field only when its value is > 0, so a missing or zero attribute is
never rendered as "0". render_property() combines that with the bilingual
content resolution into one DisplayProperty.
"""
from typing import Any, Mapping, Optional, Union

from app.config import settings
from app.schemas.display_schema import DisplayField, DisplayProperty, PropertyDisplayInfo
from app.schemas.property_schema import Language, PropertyRecord, as_record
from app.services.field_schema import AREA, FIELD_SPECS, SchemaEntry, get_type_schema
from app.services.translation_service import format_area, format_property_for_display, normalize_language

AREA_UNITS = {
    Language.EN: "m²",
    Language.AR: "م²",
}


def _field_value(record: PropertyRecord, key: str) -> Optional[float]:
    value = getattr(record, key, None)
    if value is None or not value > 0:
        return None
    return value


def _build_field(record: PropertyRecord, entry: SchemaEntry, language: Language, with_icon: bool) -> Optional[DisplayField]:
    value = _field_value(record, entry.key)
    if value is None:
        return None

    spec = FIELD_SPECS[entry.key]
    if spec.kind == AREA:
        display_value: Union[int, float, str] = format_area(value, AREA_UNITS[language])
    elif isinstance(value, float) and value.is_integer():
        display_value = int(value)
    else:
        display_value = value

    return DisplayField(
        key=entry.key,
        label=spec.label(language),
        value=display_value,
        icon=spec.icon if with_icon else None,
    )


def get_property_display_info(
    record: Union[PropertyRecord, Mapping[str, Any]],
    language: Union[Language, str],
) -> PropertyDisplayInfo:
    """Primary and secondary attribute fields for the record's property type."""
    lang = normalize_language(language)
    prop = as_record(record)
    schema = get_type_schema(prop.property_type)

    primary = [_build_field(prop, entry, lang, with_icon=True) for entry in schema.primary]
    secondary = [_build_field(prop, entry, lang, with_icon=False) for entry in schema.secondary]

    return PropertyDisplayInfo(
        primary_fields=[f for f in primary if f is not None],
        secondary_fields=[f for f in secondary if f is not None],
    )


def render_property(
    record: Union[PropertyRecord, Mapping[str, Any]],
    language: Union[Language, str],
) -> DisplayProperty:
    """Everything a listing card or detail page needs, resolved for one language."""
    lang = normalize_language(language)
    prop = as_record(record)
    resolved = format_property_for_display(prop, lang)
    info = get_property_display_info(prop, lang)

    return DisplayProperty(
        id=prop.id,
        language=lang.value,
        title=resolved["title"] or "",
        description=resolved["description"] or "",
        location=resolved["location"] or "",
        features=list(resolved["features"] or []),
        property_type=prop.property_type,
        property_type_display=resolved["property_type_display"],
        status=prop.status,
        status_display=resolved["status_display"],
        governorate=prop.governorate,
        governorate_display=resolved["governorate_display"],
        price_display=resolved["price_display"],
        area_display=resolved["area_display"],
        contact_for_price=prop.contact_for_price,
        content_language=resolved["content_language"],
        language_indicator=resolved["language_indicator"],
        cover_image=prop.images[0] if prop.images else settings.placeholder_image,
        images=prop.images,
        videos=prop.videos,
        is_featured=prop.is_featured,
        primary_fields=info.primary_fields,
        secondary_fields=info.secondary_fields,
    )
