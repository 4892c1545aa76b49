import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Optional, Set

from sqlalchemy.orm import Session

from config import settings
from models import ProductMapping
from models.schemas import PharmacyItem
from services.brand_mapping import BrandEquivalenceGraph, BrandMatcher, MatchResult
from services.datasets import load_brand_graph, load_pharmacy_items
from services.identity import mapping_id

logger = logging.getLogger(__name__)


@dataclass
class AssignmentSummary:
    country_code: str
    source: str
    processed: int = 0
    skipped_existing: int = 0
    skipped_ignored: int = 0
    matched: int = 0
    unmatched: int = 0
    stored: int = 0
    already_stored: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def assign_brand_if_known(
    db: Session,
    country_code: str,
    source: str,
    items: Optional[Iterable[PharmacyItem]] = None,
    graph: Optional[BrandEquivalenceGraph] = None,
    matcher: Optional[BrandMatcher] = None,
    dry_run: bool = False,
) -> AssignmentSummary:
    """
    Assign a canonical brand to every unmapped pharmacy item and store it.

    Items that already carry a mapping id are skipped before matching. A
    mapping row whose hash already exists is left untouched.

    Args:
        db: Database session
        country_code: Country of the source catalogue
        source: Source system the items were scraped from
        items: Items to process; loaded from the configured dataset if None
        graph: Brand graph; loaded from the configured dataset if None
        matcher: Matcher with exception lists; defaults apply if None
        dry_run: Match and count without writing mapping rows

    Returns:
        Counters describing what happened to the batch
    """
    graph = graph if graph is not None else load_brand_graph(settings.brand_connections_path)
    if items is None:
        items = load_pharmacy_items(settings.pharmacy_items_path, must_exist=settings.pharmacy_items_must_exist)
    matcher = matcher or BrandMatcher()

    summary = AssignmentSummary(country_code=country_code, source=source)
    pending: Set[str] = set()
    logger.info(f"Starting brand assignment: country={country_code}, source={source}, dry_run={dry_run}")

    try:
        for item in items:
            summary.processed += 1

            if item.m_id:
                summary.skipped_existing += 1
                continue

            result = matcher.match(graph, item.title)
            if result.ignored:
                summary.skipped_ignored += 1
                continue

            logger.debug(f"{item.title} -> {list(result.matched_brands)}")
            if result.canonical_brand:
                summary.matched += 1
            else:
                summary.unmatched += 1

            if dry_run:
                continue
            if _store_mapping(db, item, result, country_code, source, pending):
                summary.stored += 1
            else:
                summary.already_stored += 1

        if not dry_run:
            db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Brand assignment failed: country={country_code}, source={source}")
        raise

    logger.info(
        f"Brand assignment finished: processed={summary.processed}, matched={summary.matched}, "
        f"unmatched={summary.unmatched}, stored={summary.stored}, skipped_existing={summary.skipped_existing}"
    )
    return summary


def _store_mapping(
    db: Session,
    item: PharmacyItem,
    result: MatchResult,
    country_code: str,
    source: str,
    pending: Set[str],
) -> bool:
    row_id = mapping_id(source, country_code, item.source_id)
    if row_id in pending or db.get(ProductMapping, row_id) is not None:
        return False
    db.add(
        ProductMapping(
            id=row_id,
            source=source,
            country_code=country_code,
            source_id=item.source_id,
            title=item.title,
            brand=result.canonical_brand,
            meta={"matchedBrands": list(result.matched_brands)},
        )
    )
    pending.add(row_id)
    return True
