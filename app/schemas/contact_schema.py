"""Pydantic schemas for the public contact form."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactInquiryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1)
    property_interest: Optional[str] = Field(None, max_length=255)


class ContactInquiryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    property_interest: Optional[str] = None
    language: Optional[str] = None
    created_at: datetime


class ContactInfoItem(BaseModel):
    kind: str
    title: str
    details: List[str]
    description: str


class ContactInfo(BaseModel):
    language: str
    items: List[ContactInfoItem]
