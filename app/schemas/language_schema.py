"""Pydantic schemas for the language endpoints."""
from pydantic import BaseModel

from app.schemas.property_schema import Language


class LanguageRead(BaseModel):
    language: Language
    is_rtl: bool
    direction: str


class LanguageUpdate(BaseModel):
    language: Language
