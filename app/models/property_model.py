"""Property SQLAlchemy model: one bilingual real estate listing."""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    title: Mapped[Optional[str]] = mapped_column(String(500))
    description: Mapped[Optional[str]] = mapped_column(Text)
    location: Mapped[Optional[str]] = mapped_column(String(500))
    features: Mapped[List[str]] = mapped_column(JSON, default=list)

    title_en: Mapped[Optional[str]] = mapped_column(String(500))
    title_ar: Mapped[Optional[str]] = mapped_column(String(500))
    description_en: Mapped[Optional[str]] = mapped_column(Text)
    description_ar: Mapped[Optional[str]] = mapped_column(Text)
    location_en: Mapped[Optional[str]] = mapped_column(String(500))
    location_ar: Mapped[Optional[str]] = mapped_column(String(500))
    features_en: Mapped[Optional[List[str]]] = mapped_column(JSON)
    features_ar: Mapped[Optional[List[str]]] = mapped_column(JSON)

    property_type: Mapped[str] = mapped_column(String(20), comment="apartment, villa, building, hotel, office, land")
    status: Mapped[str] = mapped_column(String(20), default="for_sale", comment="for_sale, for_rent, sold, rented")
    governorate: Mapped[Optional[str]] = mapped_column(String(50))

    area: Mapped[Optional[float]] = mapped_column(Float)
    land_area: Mapped[Optional[float]] = mapped_column(Float)
    building_area: Mapped[Optional[float]] = mapped_column(Float)
    total_area: Mapped[Optional[float]] = mapped_column(Float)
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer)
    floor: Mapped[Optional[int]] = mapped_column(Integer)
    floors: Mapped[Optional[int]] = mapped_column(Integer)
    parking: Mapped[Optional[int]] = mapped_column(Integer)
    apartments: Mapped[Optional[int]] = mapped_column(Integer)
    rooms: Mapped[Optional[int]] = mapped_column(Integer)
    studios: Mapped[Optional[int]] = mapped_column(Integer)
    view: Mapped[Optional[str]] = mapped_column(String(255))

    price: Mapped[Optional[float]] = mapped_column(Float, comment="Ignored for display when contact_for_price is set")
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    contact_for_price: Mapped[bool] = mapped_column(Boolean, default=False)

    images: Mapped[List[str]] = mapped_column(JSON, default=list, comment="Ordered URIs, first is the cover")
    videos: Mapped[List[str]] = mapped_column(JSON, default=list)

    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50))
    contact_email: Mapped[Optional[str]] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_properties_property_type", "property_type"),
        Index("ix_properties_status", "status"),
        Index("ix_properties_price", "price"),
        Index("ix_properties_is_featured", "is_featured"),
        Index("ix_properties_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title='{self.title}', type={self.property_type})>"
