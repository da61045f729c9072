"""Tests for token extraction, keyword matching and heuristics."""

import pytest

from smartbite.services.heuristics import looks_diabetes_risky
from smartbite.services.ingredients import extract_tokens
from smartbite.services.matching import any_token_contains, contains_keyword
from tests.conftest import make_food


def test_extract_tokens_splits_ingredient_string() -> None:
    food = make_food(
        "Granola",
        brand="Acme",
        category="grains",
        ingredients=" Oats, Honey ,, Almonds ",
        allergens=["Tree-Nuts"],
    )

    assert extract_tokens(food) == [
        "oats",
        "honey",
        "almonds",
        "tree-nuts",
        "granola",
        "acme",
        "grains",
    ]


def test_extract_tokens_keeps_list_entries_whole() -> None:
    food = make_food("Salad", ingredients=["Romaine, chopped", "Olive Oil"])

    assert extract_tokens(food) == ["romaine, chopped", "olive oil", "salad"]


def test_extract_tokens_of_empty_food() -> None:
    assert extract_tokens(make_food("")) == []


@pytest.mark.parametrize(
    ("haystack", "needle", "expected"),
    [
        ("Peanut Butter", "peanut", True),
        ("peanuts", "nuts", True),
        ("Walnut", "WALNUT", True),
        ("rice", "", False),
        ("rice", "   ", False),
        ("rice", "wheat", False),
    ],
)
def test_contains_keyword(haystack: str, needle: str, expected: bool) -> None:
    assert contains_keyword(haystack, needle) is expected


def test_any_token_contains() -> None:
    assert any_token_contains(["flour", "cane sugar"], "sugar")
    assert not any_token_contains([], "sugar")


def test_diabetes_heuristic_on_name_and_category() -> None:
    assert looks_diabetes_risky("orange juice", "beverages", [])
    assert looks_diabetes_risky("protein bar", "snacks", ["maltodextrin"])
    assert not looks_diabetes_risky("plain yogurt", "dairy", ["milk"])


def test_diabetes_heuristic_flags_sugar_free_labels() -> None:
    assert looks_diabetes_risky("sugar-free mints", "snacks", [])
