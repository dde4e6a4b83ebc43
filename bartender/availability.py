"""Which recipes can be made from the current inventory.

Everything here is a pure function over snapshots that were already fetched,
so it is safe to call from any thread. Recipes only need ``name`` and
``ingredients`` (each with a ``name``); both ORM rows and response models
qualify. Ingredient collections may hold plain names or objects with a
``name``.
"""
import locale
import logging
import unicodedata
from typing import Iterable, Iterator, List

from .normalize import ingredient_name, is_ingredient_match, normalize_ingredient, title_case

logger = logging.getLogger(__name__)

__all__ = [
    "ingredient_set",
    "can_make",
    "missing_ingredients",
    "filter_recipes",
    "suggest_ingredients",
    "match_recipes",
    "set_collation_locale",
]


def ingredient_set(ingredients: Iterable) -> frozenset:
    names = (normalize_ingredient(ingredient_name(i)) for i in ingredients)
    return frozenset(n for n in names if n)


def can_make(recipe, ingredients: Iterable) -> bool:
    have = ingredient_set(ingredients)
    return all(is_ingredient_match(ri.name, have) for ri in recipe.ingredients)


def missing_ingredients(recipe, ingredients: Iterable) -> List[str]:
    have = ingredient_set(ingredients)
    return [ri.name for ri in recipe.ingredients if not is_ingredient_match(ri.name, have)]


def filter_recipes(
    recipes: Iterable,
    ingredients: Iterable,
    search_term: str = "",
    only_makeable: bool = False,
) -> Iterator:
    """Lazily yield recipes matching the search term and, optionally, makeable ones."""
    have = ingredient_set(ingredients)
    needle = (search_term or "").casefold()
    for recipe in recipes:
        if needle and needle not in recipe.name.casefold():
            continue
        if only_makeable and not can_make(recipe, have):
            continue
        yield recipe


def _strip_accents(text: str) -> str:
    text = unicodedata.normalize("NFD", text)
    text = "".join(c for c in text if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", text)


def _locale_key(name: str):
    # accents fold onto their base letter first so "Éclair" sorts with the
    # e's even when the process runs under the C locale
    folded = _strip_accents(name).casefold()
    return (folded, locale.strxfrm(name.casefold()), name)


def suggest_ingredients(recipes: Iterable, ingredients: Iterable) -> List[str]:
    """Recipe ingredients the user does not own yet, title-cased and sorted."""
    have = ingredient_set(ingredients)
    suggestions = set()
    for recipe in recipes:
        for ri in recipe.ingredients:
            name = title_case(ri.name)
            if name and normalize_ingredient(name) not in have:
                suggestions.add(name)
    return sorted(suggestions, key=_locale_key)


def match_recipes(recipes: Iterable, ingredients: Iterable) -> List[dict]:
    have = ingredient_set(ingredients)
    results = []
    for r in recipes:
        matched = [ri.name for ri in r.ingredients if is_ingredient_match(ri.name, have)]
        missing = [ri.name for ri in r.ingredients if not is_ingredient_match(ri.name, have)]
        results.append({
            "id": r.id,
            "name": r.name,
            "matched_count": len(matched),
            "matched": matched,
            "match": len(missing) == 0,
            "missing_count": len(missing),
            "missing": missing,
        })
    return results


def set_collation_locale(name: str) -> bool:
    """Switch LC_COLLATE used for suggestion ordering; False if unavailable."""
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        logger.warning("Collation locale %r is not available, keeping the default", name)
        return False
    return True
