"""
Loaders for the brand connection and pharmacy item datasets.

Both datasets are JSON arrays of objects; rows are validated with the
pydantic schemas in models.schemas before they reach the matcher.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from models.schemas import BrandConnectionRecord, PharmacyItem
from services.brand_mapping import BrandEquivalenceGraph, BrandRelationship, build_brand_graph

logger = logging.getLogger(__name__)

_CONNECTIONS = TypeAdapter(List[BrandConnectionRecord])
_ITEMS = TypeAdapter(List[PharmacyItem])


class DatasetNotFoundError(FileNotFoundError):
    pass


class DatasetFormatError(ValueError):
    pass


def _read_json(path: Path):
    if not path.exists():
        raise DatasetNotFoundError(f"Dataset not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DatasetFormatError(f"Invalid JSON in {path}: {exc}") from exc


def load_brand_relationships(path: str | Path) -> List[BrandRelationship]:
    path = Path(path)
    try:
        records = _CONNECTIONS.validate_python(_read_json(path))
    except ValidationError as exc:
        raise DatasetFormatError(f"Invalid brand connections in {path}: {exc}") from exc
    return [BrandRelationship(r.manufacturer_p1, r.manufacturers_p2) for r in records]


@lru_cache(maxsize=8)
def _cached_graph(path: str) -> BrandEquivalenceGraph:
    relationships = load_brand_relationships(path)
    logger.info(f"Loaded {len(relationships)} brand connections from {path}")
    return build_brand_graph(relationships)


def load_brand_graph(path: str | Path) -> BrandEquivalenceGraph:
    """Build the equivalence graph for a connections file, once per path."""
    return _cached_graph(str(Path(path).resolve()))


def clear_brand_graph_cache() -> None:
    _cached_graph.cache_clear()


def load_pharmacy_items(path: str | Path, must_exist: bool = True) -> List[PharmacyItem]:
    path = Path(path)
    if not path.exists() and not must_exist:
        logger.warning(f"Pharmacy items dataset {path} not found, nothing to process")
        return []
    try:
        return _ITEMS.validate_python(_read_json(path))
    except ValidationError as exc:
        raise DatasetFormatError(f"Invalid pharmacy items in {path}: {exc}") from exc
