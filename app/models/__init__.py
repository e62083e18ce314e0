"""SQLAlchemy models for the Zeina Real Estate backend."""
from app.models.property_model import Property
from app.models.contact_model import ContactInquiry

__all__ = [
    "Property",
    "ContactInquiry",
]
