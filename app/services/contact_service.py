"""Contact service: localized office details and storage of contact-form inquiries."""
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models.contact_model import ContactInquiry
from app.schemas.contact_schema import ContactInfo, ContactInfoItem, ContactInquiryCreate
from app.schemas.property_schema import Language
from app.services.lebanese_service import format_lebanese_phone, validate_lebanese_phone
from app.services.validation_service import sanitize_input, validate_email

logger = get_logger(__name__)

_LABELS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "phone": "Phone",
        "phone_description": "Available Monday - Friday, 9AM - 6PM",
        "email": "Email",
        "email_description": "We respond within 24 hours",
        "address": "Address",
        "address_detail": "Lebanon",
        "address_description": "Serving all of Lebanon",
        "hours": "Hours",
        "hours_weekdays": "Mon - Fri: 9AM - 6PM",
        "hours_saturday": "Sat: 10AM - 4PM",
        "hours_description": "Sunday: By appointment",
    },
    Language.AR: {
        "phone": "الهاتف",
        "phone_description": "متاح من الاثنين إلى الجمعة، 9 صباحاً - 6 مساءً",
        "email": "البريد الإلكتروني",
        "email_description": "نرد خلال 24 ساعة",
        "address": "العنوان",
        "address_detail": "لبنان",
        "address_description": "نخدم جميع أنحاء لبنان",
        "hours": "ساعات العمل",
        "hours_weekdays": "الاثنين - الجمعة: 9 صباحاً - 6 مساءً",
        "hours_saturday": "السبت: 10 صباحاً - 4 مساءً",
        "hours_description": "الأحد: بموعد مسبق",
    },
}


def get_contact_info(language: Language) -> ContactInfo:
    t = _LABELS[language]
    items = [
        ContactInfoItem(
            kind="phone",
            title=t["phone"],
            details=[format_lebanese_phone(p) for p in settings.office_phones],
            description=t["phone_description"],
        ),
        ContactInfoItem(
            kind="email",
            title=t["email"],
            details=[settings.office_email],
            description=t["email_description"],
        ),
        ContactInfoItem(
            kind="address",
            title=t["address"],
            details=[t["address_detail"]],
            description=t["address_description"],
        ),
        ContactInfoItem(
            kind="hours",
            title=t["hours"],
            details=[t["hours_weekdays"], t["hours_saturday"]],
            description=t["hours_description"],
        ),
    ]
    return ContactInfo(language=language.value, items=items)


def _validate_inquiry(payload: ContactInquiryCreate) -> List[str]:
    errors = []
    if not sanitize_input(payload.name):
        errors.append("Name is required")
    if not validate_email(payload.email.strip()):
        errors.append("Invalid email address")
    if payload.phone and not validate_lebanese_phone(payload.phone):
        errors.append("Invalid Lebanese phone number")
    if not sanitize_input(payload.message):
        errors.append("Message is required")
    return errors


async def submit_inquiry(
    db: AsyncSession,
    payload: ContactInquiryCreate,
    client: str,
    language: Optional[Language] = None,
) -> ContactInquiry:
    """Validate, sanitize and store one inquiry."""
    errors = _validate_inquiry(payload)
    if errors:
        raise ValidationError("Contact form is invalid", errors=errors)

    inquiry = ContactInquiry(
        name=sanitize_input(payload.name),
        email=payload.email.strip(),
        phone=format_lebanese_phone(payload.phone) if payload.phone else None,
        subject=sanitize_input(payload.subject) or None,
        message=sanitize_input(payload.message),
        property_interest=sanitize_input(payload.property_interest) or None,
        language=language.value if language else None,
    )
    db.add(inquiry)
    await db.flush()
    await db.refresh(inquiry)
    logger.info("Contact inquiry stored", extra={"client": client})
    return inquiry
