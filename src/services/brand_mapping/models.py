"""
Data models for brand mapping.

This module contains the value objects shared by the graph builder and the
matcher: relationship rows, the equivalence graph, matching exceptions and
per-title match results.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from constants import (
    FIRST_OR_SECOND_WORD_BRANDS,
    FRONT_ANCHORED_BRANDS,
    IGNORED_TITLES,
    LITERAL_CASE_BRANDS,
)
from services.brand_mapping.text_utils import normalize_brand_name


@dataclass(frozen=True)
class BrandRelationship:
    """One manufacturer row: a brand and its ';'-separated related brands."""
    primary_brand: str
    related_brands: str


@dataclass(frozen=True, eq=False)
class BrandEquivalenceGraph:
    """Symmetric brand -> equivalent brands mapping, read-only once built."""
    relations: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    candidates: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self):
        frozen = MappingProxyType({brand: tuple(related) for brand, related in self.relations.items()})
        object.__setattr__(self, "relations", frozen)
        object.__setattr__(self, "candidates", _flatten(frozen.values()))

    def __contains__(self, brand: object) -> bool:
        return brand in self.relations

    def __len__(self) -> int:
        return len(self.relations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BrandEquivalenceGraph):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def related(self, brand: str) -> Tuple[str, ...]:
        return self.relations.get((brand or "").lower(), ())

    def to_dict(self) -> Dict[str, List[str]]:
        return {brand: list(related) for brand, related in self.relations.items()}


def _flatten(groups: Iterable[Tuple[str, ...]]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(brand for group in groups for brand in group))


@dataclass(frozen=True)
class MatchExceptions:
    """
    Static exception lists consulted by the matcher.

    Entries of the normalized lists are folded with normalize_brand_name on
    construction; literal_case_brands are kept verbatim because they are
    compared against the raw title.
    """
    ignored_titles: FrozenSet[str] = frozenset()
    front_anchored_brands: FrozenSet[str] = frozenset()
    first_or_second_word_brands: FrozenSet[str] = frozenset()
    literal_case_brands: FrozenSet[str] = frozenset()

    def __post_init__(self):
        for name in ("ignored_titles", "front_anchored_brands", "first_or_second_word_brands"):
            values = getattr(self, name)
            object.__setattr__(self, name, frozenset(normalize_brand_name(v) for v in values))
        object.__setattr__(self, "literal_case_brands", frozenset(self.literal_case_brands))

    @classmethod
    def defaults(cls) -> "MatchExceptions":
        return cls(
            ignored_titles=frozenset(IGNORED_TITLES),
            front_anchored_brands=frozenset(FRONT_ANCHORED_BRANDS),
            first_or_second_word_brands=frozenset(FIRST_OR_SECOND_WORD_BRANDS),
            literal_case_brands=frozenset(LITERAL_CASE_BRANDS),
        )


@dataclass(frozen=True)
class MatchResult:
    """Brands matched for one title and the canonical pick among them."""
    matched_brands: Tuple[str, ...] = ()
    canonical_brand: Optional[str] = None
    ignored: bool = False

    @classmethod
    def from_matches(cls, matches: Iterable[str]) -> "MatchResult":
        unique = tuple(dict.fromkeys(matches))
        group = sorted(unique)
        return cls(matched_brands=unique, canonical_brand=group[0] if group else None)

    @classmethod
    def skipped(cls) -> "MatchResult":
        return cls(ignored=True)

    @property
    def brand_group(self) -> List[str]:
        return sorted(self.matched_brands)
