"""
Brand mapping for pharmacy product titles.

Builds the brand equivalence graph from manufacturer relationships and
matches product titles against it to pick one canonical brand per product.
"""

from services.brand_mapping.models import (
    BrandEquivalenceGraph,
    BrandRelationship,
    MatchExceptions,
    MatchResult,
)
from services.brand_mapping.graph import BrandGraphBuilder, build_brand_graph
from services.brand_mapping.matcher import BrandMatcher, match_brand
from services.brand_mapping.text_utils import (
    is_separate_term,
    normalize_brand_name,
    split_related_brands,
)

__all__ = [
    "BrandEquivalenceGraph",
    "BrandRelationship",
    "MatchExceptions",
    "MatchResult",
    "BrandGraphBuilder",
    "build_brand_graph",
    "BrandMatcher",
    "match_brand",
    "is_separate_term",
    "normalize_brand_name",
    "split_related_brands",
]
