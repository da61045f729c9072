"""Searchable token extraction for food items."""

from smartbite.domain.foods import FoodItem


def extract_tokens(food: FoodItem) -> list[str]:
    """Flatten a food's ingredients, declared allergens and labels.

    Name, brand and category are appended because allergens often only
    appear in the product name ("Peanut Butter Cookies").
    """
    raw: list[str] = []
    if isinstance(food.ingredients, str):
        raw.extend(food.ingredients.split(","))
    elif food.ingredients:
        raw.extend(str(item) for item in food.ingredients)
    raw.extend(str(tag) for tag in food.allergens or [])
    raw.extend(value for value in (food.name, food.brand, food.category) if value)
    tokens: list[str] = []
    for value in raw:
        token = value.strip().lower()
        if token:
            tokens.append(token)
    return tokens
