"""
Exception lists applied while matching product titles to brands.

Titles and brands are compared after normalization, so casing here only
matters for LITERAL_CASE_BRANDS, which are checked against the raw title.
"""

# Titles that never get a brand assigned
IGNORED_TITLES = [
    "BIO",
    "NEB",
]

# Brands that only count when the title starts with them
FRONT_ANCHORED_BRANDS = [
    "rich",
    "rff",
    "flex",
    "ultra",
    "gum",
    "beauty",
    "orto",
    "free",
    "112",
    "kin",
    "happy",
]

# Brands that must be the first or second word of the title
FIRST_OR_SECOND_WORD_BRANDS = [
    "heel",
    "contour",
    "nero",
    "rsv",
]

# Brands that must appear verbatim (case-sensitive) in the raw title
LITERAL_CASE_BRANDS = [
    "HAPPY",
]
