from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class ProductMapping(Base):
    """Brand assigned to one source product, addressed by its mapping hash."""

    __tablename__ = "product_mappings"
    __table_args__ = (
        Index("idx_product_mappings_source_country", "source", "country_code"),
        {'extend_existing': True},
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    country_code: Mapped[str] = mapped_column(String(10), nullable=False)
    source_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)  # {"matchedBrands": [...]}
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def matched_brands(self) -> List[str]:
        return list((self.meta or {}).get("matchedBrands", []))
