import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from . import crud, schemas

logger = logging.getLogger(__name__)

STANDARD_RECIPES_FILE = Path(__file__).resolve().parent / "data" / "standard_recipes.json"


def load_recipes(path=STANDARD_RECIPES_FILE):
    """Load recipes from a JSON file and return a list of dicts.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: list of recipe dictionaries, empty if the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def seed_standard_recipes(db: Session, recipes=None) -> int:
    """Insert the standard recipes that are not stored yet.

    Each recipe is committed on its own, so running this again is a no-op.
    Returns the number of recipes added.
    """
    if recipes is None:
        recipes = load_recipes()
    added = 0
    for data in recipes:
        recipe = schemas.RecipeCreate.model_validate(data)
        if crud.get_standard_recipe_by_name(db, recipe.name) is not None:
            logger.debug("Standard recipe %r already exists", recipe.name)
            continue
        crud.create_recipe(db, recipe, is_custom=False)
        added += 1
    logger.info("Standard recipe seeding complete (%d added)", added)
    return added
