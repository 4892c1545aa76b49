"""API router for brand matching and assignment."""

import logging
import os

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config import settings
from models import ProductMapping, get_db
from models.schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentSummaryResponse,
    MatchRequest,
    MatchResponse,
    ProductMappingResponse,
    RelatedBrandsResponse,
)
from services.brand_assignment import assign_brand_if_known
from services.brand_mapping import BrandEquivalenceGraph, BrandMatcher
from services.datasets import DatasetFormatError, DatasetNotFoundError, load_brand_graph
from workers.tasks import assign_brands

logger = logging.getLogger(__name__)

router = APIRouter()

RUN_TASKS_INLINE = os.getenv("RUN_TASKS_INLINE", "false").lower() == "true"


def get_brand_graph() -> BrandEquivalenceGraph:
    try:
        return load_brand_graph(settings.brand_connections_path)
    except (DatasetNotFoundError, DatasetFormatError) as e:
        logger.error(f"Brand graph unavailable: {e}")
        raise HTTPException(status_code=503, detail="Brand connections dataset unavailable")


def get_brand_matcher() -> BrandMatcher:
    return BrandMatcher()


@router.post("/match", response_model=MatchResponse)
async def match_title(
    payload: MatchRequest,
    graph: BrandEquivalenceGraph = Depends(get_brand_graph),
    matcher: BrandMatcher = Depends(get_brand_matcher),
) -> MatchResponse:
    """
    Match a single product title against the brand graph.

    Args:
        payload: Title to match
        graph: Brand equivalence graph
        matcher: Brand matcher

    Returns:
        Canonical brand and every brand that matched
    """
    result = matcher.match(graph, payload.title)
    return MatchResponse(
        title=payload.title,
        brand=result.canonical_brand,
        matched_brands=list(result.matched_brands),
        ignored=result.ignored,
    )


@router.get("/graph/{brand}", response_model=RelatedBrandsResponse)
async def related_brands(
    brand: str,
    graph: BrandEquivalenceGraph = Depends(get_brand_graph),
) -> RelatedBrandsResponse:
    key = brand.lower()
    if key not in graph:
        raise HTTPException(status_code=404, detail=f"Brand '{brand}' not found")
    return RelatedBrandsResponse(brand=key, related_brands=list(graph.related(key)))


@router.post("/assignments", response_model=AssignmentResponse, status_code=202)
async def start_assignment(
    payload: AssignmentCreate | None = None,
    db: Session = Depends(get_db),
) -> AssignmentResponse:
    """
    Assign brands to the configured pharmacy items.

    Runs inline when RUN_TASKS_INLINE is set, otherwise queues a worker task.
    """
    country_code = (payload.country_code if payload else None) or settings.default_country_code
    source = (payload.source if payload else None) or settings.default_source
    dry_run = bool(payload.dry_run) if payload else False

    if RUN_TASKS_INLINE:
        try:
            summary = assign_brand_if_known(db, country_code, source, dry_run=dry_run)
        except (DatasetNotFoundError, DatasetFormatError) as e:
            raise HTTPException(status_code=503, detail=str(e))
        return AssignmentResponse(
            status="completed",
            summary=AssignmentSummaryResponse(**summary.to_dict()),
        )

    task = assign_brands.delay(country_code, source, dry_run)
    return AssignmentResponse(status="queued", task_id=task.id)


@router.get("/mappings/{mapping_id}", response_model=ProductMappingResponse)
async def get_mapping(
    mapping_id: str,
    db: Session = Depends(get_db),
) -> ProductMapping:
    mapping = db.get(ProductMapping, mapping_id)
    if not mapping:
        raise HTTPException(status_code=404, detail="Mapping not found")
    return mapping
