import logging
from typing import Dict, Iterable

from services.brand_mapping.models import BrandEquivalenceGraph, BrandRelationship
from services.brand_mapping.text_utils import split_related_brands

logger = logging.getLogger(__name__)


def build_brand_graph(relationships: Iterable[BrandRelationship]) -> BrandEquivalenceGraph:
    """
    Build the undirected brand equivalence graph.

    Every (primary, related) pair adds an edge in both directions. Brand names
    are lowercased; empty tokens left over from stray separators are dropped.

    Args:
        relationships: Manufacturer rows in dataset order

    Returns:
        Graph keyed by lowercase brand, members in first-seen order
    """
    brand_map: Dict[str, Dict[str, None]] = {}
    dropped = 0

    for relationship in relationships:
        primary = (relationship.primary_brand or "").strip().lower()
        if not primary:
            dropped += 1
            continue
        brand_map.setdefault(primary, {})

        for related in split_related_brands(relationship.related_brands):
            if not related:
                dropped += 1
                continue
            brand_map.setdefault(related, {})
            brand_map[primary][related] = None
            brand_map[related][primary] = None

    if dropped:
        logger.debug(f"Dropped {dropped} empty brand tokens while building graph")
    logger.info(f"Built brand graph with {len(brand_map)} brands")

    return BrandEquivalenceGraph(relations={brand: tuple(related) for brand, related in brand_map.items()})


class BrandGraphBuilder:
    """Thin wrapper so callers can hold a builder alongside a matcher."""

    def build(self, relationships: Iterable[BrandRelationship]) -> BrandEquivalenceGraph:
        return build_brand_graph(relationships)
