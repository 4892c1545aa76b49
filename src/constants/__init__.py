from constants.brand_exceptions import (
    FIRST_OR_SECOND_WORD_BRANDS,
    FRONT_ANCHORED_BRANDS,
    IGNORED_TITLES,
    LITERAL_CASE_BRANDS,
)

__all__ = [
    "IGNORED_TITLES",
    "FRONT_ANCHORED_BRANDS",
    "FIRST_OR_SECOND_WORD_BRANDS",
    "LITERAL_CASE_BRANDS",
]
