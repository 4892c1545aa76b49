from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BrandConnectionRecord(BaseModel):
    """Row of brandConnections.json."""
    manufacturer_p1: str
    manufacturers_p2: str = ""

    model_config = ConfigDict(extra="ignore")


class PharmacyItem(BaseModel):
    """Row of pharmacyItems.json."""
    title: str
    source_id: str
    m_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class MatchRequest(BaseModel):
    title: str = Field(..., max_length=1024)


class MatchResponse(BaseModel):
    title: str
    brand: Optional[str]
    matched_brands: List[str]
    ignored: bool = False


class RelatedBrandsResponse(BaseModel):
    brand: str
    related_brands: List[str]


class AssignmentCreate(BaseModel):
    country_code: Optional[str] = Field(None, min_length=1, max_length=10)
    source: Optional[str] = Field(None, min_length=1, max_length=50)
    dry_run: bool = False


class AssignmentSummaryResponse(BaseModel):
    country_code: str
    source: str
    processed: int = 0
    skipped_existing: int = 0
    skipped_ignored: int = 0
    matched: int = 0
    unmatched: int = 0
    stored: int = 0
    already_stored: int = 0


class AssignmentResponse(BaseModel):
    status: str
    task_id: Optional[str] = None
    summary: Optional[AssignmentSummaryResponse] = None


class ProductMappingResponse(BaseModel):
    id: str
    source: str
    country_code: str
    source_id: str
    title: str
    brand: Optional[str]
    matched_brands: List[str]
    created_at: datetime

    model_config = {"from_attributes": True}
