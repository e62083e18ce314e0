"""Contact API router: office details and the public contact form. /api/v1/contact"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import DisplayLanguage, get_db
from app.api.responses import ok
from app.core.rate_limit import CONTACT_FORM_LIMIT, limiter
from app.schemas.base_schema import ApiResponse
from app.schemas.contact_schema import ContactInfo, ContactInquiryCreate, ContactInquiryRead
from app.services.contact_service import get_contact_info, submit_inquiry

router = APIRouter()


@router.get("/info", response_model=ApiResponse[ContactInfo])
async def contact_info(request: Request, language: DisplayLanguage):
    return ok(get_contact_info(language), "Contact information retrieved", request)


@router.post("", response_model=ApiResponse[ContactInquiryRead], status_code=201)
@limiter.limit(CONTACT_FORM_LIMIT)
async def send_inquiry(
    request: Request,
    payload: ContactInquiryCreate,
    language: DisplayLanguage,
    db: AsyncSession = Depends(get_db),
):
    """Store a contact-form message. Limited per client address."""
    client = request.client.host if request.client else "unknown"
    inquiry = await submit_inquiry(db, payload, client, language)
    return ok(
        ContactInquiryRead.model_validate(inquiry),
        "Thank you for your inquiry. We'll get back to you within 24 hours.",
        request,
    )
