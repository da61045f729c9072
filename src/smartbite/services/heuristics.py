"""Keyword heuristics used when structured nutrition data is missing.

These are best-effort signals: a "sugar-free" product still matches on
"sugar", so callers treat a positive as advisory only.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType

from smartbite.services.matching import contains_keyword

Heuristic = Callable[[str, str, list[str]], bool]

_SUGAR_KEYWORDS = (
    "glucose",
    "sugar",
    "sucrose",
    "fructose",
    "corn syrup",
    "syrup",
    "jaggery",
    "sweet",
    "maltodextrin",
)

_SUGARY_FOOD_KEYWORDS = (
    "biscuit",
    "cookie",
    "sweet",
    "chocolate",
    "candy",
    "cake",
    "pastry",
    "soft drink",
    "soda",
    "juice",
    "dessert",
)


def looks_diabetes_risky(name: str, category: str, tokens: list[str]) -> bool:
    """Flag likely high-sugar foods from their name, category and tokens."""
    haystack = " ".join([name, category, *tokens])
    return any(
        contains_keyword(haystack, keyword)
        for keyword in (*_SUGAR_KEYWORDS, *_SUGARY_FOOD_KEYWORDS)
    )


DEFAULT_HEURISTICS: Mapping[str, Heuristic] = MappingProxyType(
    {"diabetes": looks_diabetes_risky}
)
