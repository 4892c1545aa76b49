import logging
from typing import Dict, Optional

from services.brand_mapping.models import BrandEquivalenceGraph, MatchExceptions, MatchResult
from services.brand_mapping.text_utils import is_separate_term, normalize_brand_name

logger = logging.getLogger(__name__)


class BrandMatcher:
    """
    Matches pharmacy product titles against a brand equivalence graph.

    Each graph member is tested in order against these rules, and the first
    rule that decides stops evaluation for that candidate:

    1. literal-case brands ("HAPPY") need the raw title to contain them
    2. a raw title that starts with the brand as a whole term is an immediate match
    3. brands already matched are not evaluated again
    4. brands that are themselves ignored titles never match
    5. front-anchored brands must prefix the normalized title
    6. first-or-second-word brands must be word 0 or 1 of the title
    7. otherwise the brand must appear as a separate term

    Usage:
        matcher = BrandMatcher()
        result = matcher.match(graph, "Bayer Aspirin 100mg")
        # result.canonical_brand == "aspirin"
    """

    def __init__(self, exceptions: Optional[MatchExceptions] = None):
        self.exceptions = exceptions if exceptions is not None else MatchExceptions.defaults()

    def is_ignored_title(self, title: str) -> bool:
        return normalize_brand_name(title) in self.exceptions.ignored_titles

    def match(self, graph: BrandEquivalenceGraph, title: str) -> MatchResult:
        """
        Compute the matched brands and the canonical brand for one title.

        Args:
            graph: Brand equivalence graph
            title: Raw product title

        Returns:
            MatchResult; empty and flagged ignored when the title is excluded
        """
        title = title or ""
        normalized_title = normalize_brand_name(title)
        if normalized_title in self.exceptions.ignored_titles:
            logger.debug(f"Skipping ignored title '{title}'")
            return MatchResult.skipped()

        title_lower = title.lower()
        matched: Dict[str, None] = {}

        for brand in graph.candidates:
            if not brand:
                continue
            if brand in self.exceptions.literal_case_brands and brand not in title:
                continue
            if _starts_with_term(title_lower, brand.lower()):
                matched[brand] = None
                continue
            if brand in matched:
                continue
            if self._passes_rules(normalize_brand_name(brand), normalized_title):
                matched[brand] = None

        return MatchResult.from_matches(matched)

    def _passes_rules(self, brand: str, title: str) -> bool:
        if not brand:
            return False
        if brand in self.exceptions.ignored_titles:
            return False
        if brand in self.exceptions.front_anchored_brands and not title.startswith(brand):
            return False
        if brand in self.exceptions.first_or_second_word_brands and not _is_first_or_second_word(title, brand):
            return False
        return is_separate_term(title, brand)


def _starts_with_term(title: str, brand: str) -> bool:
    if not title.startswith(brand):
        return False
    if len(title) == len(brand) or not brand[-1].isalnum():
        return True
    return not title[len(brand)].isalnum()


def _is_first_or_second_word(title: str, brand: str) -> bool:
    words = title.split(" ")
    return brand in words[:2]


def match_brand(graph: BrandEquivalenceGraph, title: str, exceptions: Optional[MatchExceptions] = None) -> MatchResult:
    return BrandMatcher(exceptions).match(graph, title)
