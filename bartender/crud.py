import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, selectinload

from . import errors, models, schemas
from .normalize import normalize_ingredient

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors():
    try:
        yield
    except OperationalError as exc:
        logger.error("Storage failure: %s", exc.orig)
        raise errors.StorageUnavailableError() from exc


@contextmanager
def transaction(db: Session):
    """Commit everything done inside the block, or roll all of it back."""
    with _storage_errors():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise


# == Ingredients ==

def list_ingredients(db: Session):
    with _storage_errors():
        return db.query(models.Ingredient).order_by(models.Ingredient.name.asc()).all()


def get_ingredient(db: Session, ingredient_id: int):
    with _storage_errors():
        return db.get(models.Ingredient, ingredient_id)


def _find_ingredient_by_name(db: Session, name: str):
    return (
        db.query(models.Ingredient)
        .filter(models.Ingredient.name_key == normalize_ingredient(name))
        .first()
    )


def add_ingredient(db: Session, ingredient: schemas.IngredientCreate):
    db_ingredient = models.Ingredient(
        name=ingredient.name, name_key=normalize_ingredient(ingredient.name)
    )
    try:
        with transaction(db):
            if _find_ingredient_by_name(db, ingredient.name) is not None:
                raise errors.DuplicateError("Ingredient already exists.")
            db.add(db_ingredient)
            # flush so the unique name_key rejects a concurrent insert here
            db.flush()
    except IntegrityError as exc:
        logger.warning("Duplicate ingredient rejected by storage: %s", ingredient.name)
        raise errors.DuplicateError("Ingredient already exists.") from exc
    except errors.DuplicateError:
        logger.warning("Duplicate ingredient: %s", ingredient.name)
        raise
    db.refresh(db_ingredient)
    logger.info("Added ingredient %s (id=%s)", db_ingredient.name, db_ingredient.id)
    return db_ingredient


def delete_ingredient(db: Session, ingredient_id: int) -> schemas.Ingredient:
    """Delete an ingredient and return a snapshot of the removed row.

    Recipes only mention ingredients by name, so nothing blocks the delete.
    """
    try:
        with transaction(db):
            db_ingredient = db.get(models.Ingredient, ingredient_id)
            if db_ingredient is None:
                raise errors.NotFoundError("Ingredient not found.")
            removed = schemas.Ingredient.model_validate(db_ingredient)
            db.delete(db_ingredient)
            db.flush()
    except IntegrityError as exc:
        raise errors.ConflictError("Cannot delete ingredient as it is used elsewhere.") from exc
    logger.info("Deleted ingredient %s (id=%s)", removed.name, removed.id)
    return removed


# == Recipes ==

def list_recipes(db: Session, custom_only: bool = False):
    query = db.query(models.Recipe).options(selectinload(models.Recipe.ingredients))
    if custom_only:
        query = query.filter(models.Recipe.is_custom.is_(True))
    with _storage_errors():
        return query.order_by(models.Recipe.name.asc(), models.Recipe.id.asc()).all()


def get_recipe(db: Session, recipe_id: int):
    with _storage_errors():
        return (
            db.query(models.Recipe)
            .options(selectinload(models.Recipe.ingredients))
            .filter(models.Recipe.id == recipe_id)
            .first()
        )


def get_standard_recipe_by_name(db: Session, name: str):
    with _storage_errors():
        return (
            db.query(models.Recipe)
            .filter(models.Recipe.name == name, models.Recipe.is_custom.is_(False))
            .first()
        )


def _recipe_ingredient_row(recipe_id: int, position: int, ingredient: schemas.RecipeIngredientCreate):
    return models.RecipeIngredient(
        recipe_id=recipe_id,
        position=position,
        name=ingredient.name,
        quantity=ingredient.quantity,
        unit=ingredient.unit or "",
    )


def create_recipe(db: Session, recipe: schemas.RecipeCreate, is_custom: bool = True):
    """Insert a recipe and its ingredient rows in a single transaction."""
    if not recipe.ingredients:
        raise errors.ValidationError("A recipe needs at least one ingredient.")
    with transaction(db):
        db_recipe = models.Recipe(
            name=recipe.name,
            instructions=recipe.instructions,
            is_custom=is_custom,
        )
        db.add(db_recipe)
        db.flush()
        for position, ingredient in enumerate(recipe.ingredients):
            db.add(_recipe_ingredient_row(db_recipe.id, position, ingredient))
        db.flush()
    db.refresh(db_recipe)
    logger.info(
        "Created %s recipe %s (id=%s, %d ingredients)",
        "custom" if is_custom else "standard",
        db_recipe.name,
        db_recipe.id,
        len(recipe.ingredients),
    )
    return db_recipe


def _delete_recipe_row(db: Session, recipe_id: int) -> int:
    return (
        db.query(models.Recipe)
        .filter(models.Recipe.id == recipe_id)
        .delete(synchronize_session=False)
    )


def delete_recipe(db: Session, recipe_id: int) -> schemas.Recipe:
    """Delete a custom recipe with all of its ingredient rows.

    Standard recipes are read-only and raise ForbiddenError.
    """
    with transaction(db):
        db_recipe = get_recipe(db, recipe_id)
        if db_recipe is None:
            raise errors.NotFoundError("Recipe not found.")
        if not db_recipe.is_custom:
            logger.warning("Refused to delete standard recipe %s (id=%s)", db_recipe.name, recipe_id)
            raise errors.ForbiddenError("Cannot delete standard recipes.")
        removed = schemas.Recipe.model_validate(db_recipe)
        db.expunge(db_recipe)

        (
            db.query(models.RecipeIngredient)
            .filter(models.RecipeIngredient.recipe_id == recipe_id)
            .delete(synchronize_session=False)
        )
        if _delete_recipe_row(db, recipe_id) == 0:
            raise errors.NotFoundError("Recipe not found during deletion.")
    logger.info("Deleted custom recipe %s (id=%s)", removed.name, removed.id)
    return removed


def count_rows(db: Session) -> dict:
    with _storage_errors():
        return {
            "ingredients": db.query(models.Ingredient).count(),
            "recipes": db.query(models.Recipe).count(),
            "recipe_ingredients": db.query(models.RecipeIngredient).count(),
        }
