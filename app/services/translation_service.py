"""Translation service: bilingual content selection for property records.

Handles:
- Content language detection by character class: "Beirut" → en, "بيروت" → ar
- Selecting between author-supplied _en/_ar variants (nothing is machine-translated)
- Static lookup tables for property type, status and governorate labels
- Language indicator glyph when the content language differs from the display language
- Price/area display strings
- Content guidelines and the advisory content-quality score for the admin console

Every function here accepts partial records and degrades to the raw value or to
omission; none of them raise on record shape.
"""
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from app.core.logging import get_logger
from app.schemas.display_schema import ContentGuidelines, ContentQualityReport
from app.schemas.property_schema import Language, PropertyRecord, as_record

logger = get_logger(__name__)

RecordLike = Union[PropertyRecord, Mapping[str, Any]]


class ContentLanguage(str, Enum):
    EN = "en"
    AR = "ar"
    MIXED = "mixed"


MULTILINGUAL_INDICATOR = "🌐"
LANGUAGE_INDICATORS = {
    ContentLanguage.AR: "🇱🇧",
    ContentLanguage.EN: "🇺🇸",
}

_ARABIC_PATTERN = re.compile(r"[\u0600-\u06FF]")
_LATIN_PATTERN = re.compile(r"[a-zA-Z]")


PROPERTY_TYPE_TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "apartment": "Apartment",
        "villa": "Villa",
        "building": "Building",
        "hotel": "Hotel",
        "office": "Office",
        "land": "Land",
        "house": "House",
        "commercial": "Commercial",
    },
    Language.AR: {
        "apartment": "شقة",
        "villa": "فيلا",
        "building": "مبنى",
        "hotel": "فندق",
        "office": "مكتب",
        "land": "أرض",
        "house": "منزل",
        "commercial": "تجاري",
    },
}

STATUS_TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "for_sale": "For Sale",
        "for_rent": "For Rent",
        "sold": "Sold",
        "rented": "Rented",
    },
    Language.AR: {
        "for_sale": "للبيع",
        "for_rent": "للإيجار",
        "sold": "مباع",
        "rented": "مؤجر",
    },
}

GOVERNORATE_TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "Beirut": "Beirut",
        "Mount Lebanon": "Mount Lebanon",
        "North Lebanon": "North Lebanon",
        "South Lebanon": "South Lebanon",
        "Bekaa": "Bekaa",
        "Nabatieh": "Nabatieh",
        "Akkar": "Akkar",
    },
    Language.AR: {
        "Beirut": "بيروت",
        "Mount Lebanon": "جبل لبنان",
        "North Lebanon": "شمال لبنان",
        "South Lebanon": "جنوب لبنان",
        "Bekaa": "البقاع",
        "Nabatieh": "النبطية",
        "Akkar": "عكار",
    },
}

CONTACT_FOR_PRICE = {
    Language.EN: "Contact for Price",
    Language.AR: "اتصل للسعر",
}

AREA_UNIT = "m²"

_BILINGUAL_FIELDS = ("title", "description", "location", "features")


def normalize_language(language: Union[Language, str]) -> Language:
    """Map 'en'/'ar' to Language. Other values are a caller error."""
    if isinstance(language, Language):
        return language
    return Language(language)


def detect_content_language(text: Optional[str]) -> ContentLanguage:
    """Classify text as Arabic, English or mixed by the characters it contains."""
    if not text or not isinstance(text, str):
        return ContentLanguage.EN

    has_arabic = _ARABIC_PATTERN.search(text) is not None
    has_latin = _LATIN_PATTERN.search(text) is not None

    if has_arabic and has_latin:
        return ContentLanguage.MIXED
    if has_arabic:
        return ContentLanguage.AR
    return ContentLanguage.EN


def _lookup(table: Dict[Language, Dict[str, str]], language: Language, raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    return table[language].get(raw, raw)


def _select_variant(record: PropertyRecord, field: str, language: Language) -> Any:
    en_value = getattr(record, f"{field}_en")
    ar_value = getattr(record, f"{field}_ar")
    if en_value and ar_value:
        return ar_value if language == Language.AR else en_value
    return getattr(record, field)


def translate_property_content(record: RecordLike, language: Union[Language, str]) -> Dict[str, Any]:
    """Resolve the record's text fields and labels for one display language.

    Returns a plain dict: the record's fields with title/description/location/
    features replaced by the matching bilingual variant (only when both
    variants exist) plus *_display labels.
    """
    lang = normalize_language(language)
    prop = as_record(record)
    resolved = prop.model_dump()

    for field in _BILINGUAL_FIELDS:
        resolved[field] = _select_variant(prop, field, lang)

    resolved["property_type_display"] = _lookup(PROPERTY_TYPE_TRANSLATIONS, lang, prop.property_type)
    resolved["status_display"] = _lookup(STATUS_TRANSLATIONS, lang, prop.status)
    resolved["governorate_display"] = _lookup(GOVERNORATE_TRANSLATIONS, lang, prop.governorate)
    return resolved


def language_indicator_for(content_language: ContentLanguage, language: Language) -> Optional[str]:
    if content_language.value == language.value:
        return None
    if content_language == ContentLanguage.MIXED:
        return MULTILINGUAL_INDICATOR
    return LANGUAGE_INDICATORS[content_language]


def get_display_content(record: RecordLike, language: Union[Language, str]) -> Dict[str, Any]:
    """translate_property_content plus the detected content language and indicator.

    Detection looks at the resolved title only.
    """
    lang = normalize_language(language)
    resolved = translate_property_content(record, lang)

    content_language = detect_content_language(resolved.get("title") or "")
    resolved["content_language"] = content_language.value
    resolved["language_indicator"] = language_indicator_for(content_language, lang)
    return resolved


def format_number(value: Union[int, float]) -> str:
    """Group thousands with commas; whole floats lose their decimal part."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def format_price(record: PropertyRecord, language: Language) -> Optional[str]:
    if record.contact_for_price:
        return CONTACT_FOR_PRICE[language]
    if record.price is None:
        return None
    return f"{record.currency} {format_number(record.price)}"


def format_area(value: Optional[float], unit: str = AREA_UNIT) -> Optional[str]:
    if value is None or not value > 0:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value} {unit}"


def format_property_for_display(record: RecordLike, language: Union[Language, str]) -> Dict[str, Any]:
    """get_display_content plus price_display and area_display."""
    lang = normalize_language(language)
    prop = as_record(record)
    resolved = get_display_content(prop, lang)
    resolved["price_display"] = format_price(prop, lang)
    resolved["area_display"] = format_area(prop.area)
    return resolved


_GUIDELINES = {
    Language.EN: ContentGuidelines(
        title="Professional Content Guidelines",
        tips=[
            "Use clear, descriptive titles",
            "Write detailed property descriptions",
            "Include all relevant features",
            "Use proper Lebanese location names",
            "Keep content professional and accurate",
        ],
        good_title="Modern 3-Bedroom Apartment in Hamra, Beirut",
        good_description=(
            "Beautiful modern apartment with stunning city views, premium finishes, "
            "and access to building amenities."
        ),
        good_location="Hamra, Beirut, Lebanon",
    ),
    Language.AR: ContentGuidelines(
        title="إرشادات المحتوى المهني",
        tips=[
            "استخدم عناوين واضحة ووصفية",
            "اكتب أوصاف مفصلة للعقار",
            "اذكر جميع المميزات ذات الصلة",
            "استخدم أسماء المواقع اللبنانية الصحيحة",
            "حافظ على المحتوى مهنياً ودقيقاً",
        ],
        good_title="شقة حديثة 3 غرف نوم في الحمرا، بيروت",
        good_description=(
            "شقة حديثة جميلة مع إطلالة رائعة على المدينة، تشطيبات عالية الجودة، "
            "وإمكانية الوصول إلى مرافق المبنى."
        ),
        good_location="الحمرا، بيروت، لبنان",
    ),
}


def get_content_guidelines(language: Union[Language, str]) -> ContentGuidelines:
    return _GUIDELINES[normalize_language(language)]


# (minimum length, issue, suggestion) per text field, per language
_QUALITY_RULES = {
    "title": (
        10,
        {Language.EN: "Title is too short", Language.AR: "العنوان قصير جداً"},
        {Language.EN: "Add more descriptive details", Language.AR: "أضف وصفاً أكثر تفصيلاً"},
    ),
    "description": (
        50,
        {Language.EN: "Description is too short", Language.AR: "الوصف قصير جداً"},
        {Language.EN: "Write a detailed property description", Language.AR: "اكتب وصفاً مفصلاً للعقار"},
    ),
    "location": (
        5,
        {Language.EN: "Location is not clearly specified", Language.AR: "الموقع غير محدد بوضوح"},
        {Language.EN: "Specify the location in detail", Language.AR: "اذكر الموقع بالتفصيل"},
    ),
}
_NO_FEATURES_ISSUE = {Language.EN: "No features mentioned", Language.AR: "لا توجد مميزات مذكورة"}
_NO_FEATURES_SUGGESTION = {Language.EN: "Add property features", Language.AR: "أضف مميزات العقار"}

QUALITY_PENALTY = 20


def check_content_quality(record: RecordLike, language: Union[Language, str]) -> ContentQualityReport:
    """Advisory score for the admin console: 100 minus 20 per failed check."""
    lang = normalize_language(language)
    resolved = translate_property_content(record, lang)

    issues: List[str] = []
    suggestions: List[str] = []

    for field, (min_length, issue, suggestion) in _QUALITY_RULES.items():
        value = resolved.get(field) or ""
        if len(value) < min_length:
            issues.append(issue[lang])
            suggestions.append(suggestion[lang])

    if not resolved.get("features"):
        issues.append(_NO_FEATURES_ISSUE[lang])
        suggestions.append(_NO_FEATURES_SUGGESTION[lang])

    score = max(0, 100 - len(issues) * QUALITY_PENALTY)
    logger.debug("Content quality score %d", score, extra={"property_id": resolved.get("id"), "language": lang.value})
    return ContentQualityReport(
        has_issues=bool(issues),
        issues=issues,
        suggestions=suggestions,
        score=score,
    )
