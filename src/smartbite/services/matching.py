"""Keyword matching shared by every risk checker.

Matching is a case-insensitive substring test rather than a word-boundary
match, so "peanut" is found inside "peanut butter" and "nuts" inside
"peanuts". Over-matching keeps the checkers conservative.
"""

from collections.abc import Iterable


def contains_keyword(haystack: str, needle: str) -> bool:
    """Return True when ``needle`` occurs in ``haystack``, ignoring case."""
    keyword = needle.strip().lower()
    if not keyword:
        return False
    return keyword in haystack.lower()


def any_token_contains(tokens: Iterable[str], keyword: str) -> bool:
    """Return True when any token contains the keyword."""
    return any(contains_keyword(token, keyword) for token in tokens)
