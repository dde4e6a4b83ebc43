# Exact matching only: names are compared case-insensitively after trimming,
# quantities and units never take part.


def normalize_ingredient(s: str) -> str:
    if not s:
        return ""
    return s.strip().casefold()


def title_case(s: str) -> str:
    """Capitalise each space-separated word and lower-case the rest.

    Unlike str.title(), apostrophes and hyphens do not start a new word.
    Leading, trailing and repeated spaces are dropped, so "lime   juice"
    becomes "Lime Juice" rather than keeping the empty words.
    """
    words = [w for w in (s or "").strip().split(" ") if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def ingredient_name(item) -> str:
    """Accept a plain name or anything with a ``name`` attribute."""
    if isinstance(item, str):
        return item
    return getattr(item, "name", "") or ""


def is_ingredient_match(recipe_ing: str, have_set: set) -> bool:
    """Return True if the normalized recipe ingredient is present in have_set.

    ``have_set`` must already hold normalized names.
    """
    r = normalize_ingredient(recipe_ing)
    if not r:
        return False
    return r in have_set
