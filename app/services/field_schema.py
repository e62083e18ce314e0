"""Property-type field schema: the one table that decides which numeric
attributes a property type has.

Both the public display (primary/secondary attribute badges) and the admin form
(visible and required inputs) read from PROPERTY_TYPE_SCHEMAS. There is no
other list of per-type fields anywhere in the codebase; adding a field to a
type here adds it to both views.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from app.schemas.display_schema import FormField, FormSchema
from app.schemas.property_schema import Language, PropertyType


AREA = "area"
COUNT = "count"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    kind: str
    icon: str
    label_en: str
    label_ar: str

    def label(self, language: Language) -> str:
        return self.label_ar if language == Language.AR else self.label_en


@dataclass(frozen=True)
class SchemaEntry:
    key: str
    required: bool = False


@dataclass(frozen=True)
class TypeSchema:
    label_en: str
    label_ar: str
    primary: Tuple[SchemaEntry, ...]
    secondary: Tuple[SchemaEntry, ...] = ()

    def label(self, language: Language) -> str:
        return self.label_ar if language == Language.AR else self.label_en

    @property
    def field_keys(self) -> List[str]:
        return [entry.key for entry in self.primary + self.secondary]

    @property
    def required_keys(self) -> List[str]:
        return [entry.key for entry in self.primary + self.secondary if entry.required]


FIELD_SPECS: Dict[str, FieldSpec] = {
    spec.key: spec
    for spec in (
        FieldSpec("bedrooms", COUNT, "bed", "Bedrooms", "غرف النوم"),
        FieldSpec("bathrooms", COUNT, "bath", "Bathrooms", "الحمامات"),
        FieldSpec("area", AREA, "square", "Area", "المساحة"),
        FieldSpec("floor", COUNT, "layers", "Floor", "الطابق"),
        FieldSpec("floors", COUNT, "building", "Floors", "الطوابق"),
        FieldSpec("parking", COUNT, "car", "Parking", "مواقف السيارات"),
        FieldSpec("apartments", COUNT, "home", "Apartments", "الشقق"),
        FieldSpec("land_area", AREA, "square", "Land Area", "مساحة الأرض"),
        FieldSpec("building_area", AREA, "square", "Building Area", "مساحة البناء"),
        FieldSpec("total_area", AREA, "square", "Total Area", "المساحة الإجمالية"),
        FieldSpec("rooms", COUNT, "bed", "Rooms", "الغرف"),
        FieldSpec("studios", COUNT, "home", "Studios", "الاستوديوهات"),
    )
}


def _req(key: str) -> SchemaEntry:
    return SchemaEntry(key, required=True)


def _opt(key: str) -> SchemaEntry:
    return SchemaEntry(key)


PROPERTY_TYPE_SCHEMAS: Dict[PropertyType, TypeSchema] = {
    PropertyType.APARTMENT: TypeSchema(
        "Apartment", "شقة",
        primary=(_req("bedrooms"), _req("bathrooms"), _req("area")),
        secondary=(_opt("floor"), _opt("parking")),
    ),
    PropertyType.VILLA: TypeSchema(
        "Villa", "فيلا",
        primary=(_req("bedrooms"), _req("bathrooms"), _req("area")),
        secondary=(_opt("floors"), _opt("parking")),
    ),
    PropertyType.BUILDING: TypeSchema(
        "Building", "مبنى",
        primary=(_req("floors"), _opt("apartments"), _req("land_area")),
        secondary=(_req("building_area"), _opt("parking")),
    ),
    PropertyType.HOTEL: TypeSchema(
        "Hotel", "فندق",
        primary=(_req("floors"), _req("rooms"), _opt("studios"), _req("total_area")),
        secondary=(_opt("parking"),),
    ),
    PropertyType.OFFICE: TypeSchema(
        "Office", "مكتب",
        primary=(_req("area"), _opt("floors")),
        secondary=(_opt("parking"),),
    ),
    PropertyType.LAND: TypeSchema(
        "Land", "أرض",
        primary=(_req("area"),),
    ),
}

# Unknown or missing property types.
FALLBACK_SCHEMA = TypeSchema(
    "Property", "عقار",
    primary=(_opt("area"), _opt("bedrooms"), _opt("bathrooms")),
)

BASE_REQUIRED_FIELDS = (
    "title",
    "description",
    "location",
    "property_type",
    "status",
    "contact_phone",
    "contact_email",
)


def _parse_type(property_type: Optional[str]) -> Optional[PropertyType]:
    if isinstance(property_type, PropertyType):
        return property_type
    try:
        return PropertyType(property_type)
    except (ValueError, TypeError):
        return None


def get_type_schema(property_type: Optional[str]) -> TypeSchema:
    """Return the schema row for a property type, or the fallback row."""
    parsed = _parse_type(property_type)
    if parsed is None:
        return FALLBACK_SCHEMA
    return PROPERTY_TYPE_SCHEMAS[parsed]


def visible_fields(property_type: Optional[str]) -> List[str]:
    """Numeric inputs the admin form shows for this type, in display order."""
    return get_type_schema(property_type).field_keys


def required_fields(property_type: Optional[str]) -> List[str]:
    """Base required inputs plus the type-specific required numeric inputs."""
    return list(BASE_REQUIRED_FIELDS) + get_type_schema(property_type).required_keys


def should_show_field(field_name: str, property_type: Optional[str]) -> bool:
    return field_name in visible_fields(property_type)


def get_form_schema(property_type: Optional[str], language: Language = Language.EN) -> FormSchema:
    """Describe the admin form for one property type."""
    schema = get_type_schema(property_type)
    required = set(schema.required_keys)
    fields = [
        FormField(
            key=key,
            label=FIELD_SPECS[key].label(language),
            kind=FIELD_SPECS[key].kind,
            required=key in required,
        )
        for key in schema.field_keys
    ]
    return FormSchema(
        property_type=str(property_type.value if isinstance(property_type, PropertyType) else property_type),
        label=schema.label(language),
        fields=fields,
        required=required_fields(property_type),
    )
