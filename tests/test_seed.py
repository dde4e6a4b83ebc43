import json

from bartender import crud, schemas
from bartender.seed import STANDARD_RECIPES_FILE, load_recipes, seed_standard_recipes


def test_bundled_catalogue_loads():
    recipes = load_recipes(STANDARD_RECIPES_FILE)
    names = [r["name"] for r in recipes]
    assert "Margarita" in names and "Old Fashioned" in names


def test_load_recipes_missing_file(tmp_path):
    assert load_recipes(tmp_path / "nope.json") == []


def test_seed_is_idempotent(db):
    assert seed_standard_recipes(db) == 2
    assert seed_standard_recipes(db) == 0
    recipes = crud.list_recipes(db)
    assert [r.name for r in recipes] == ["Margarita", "Old Fashioned"]
    assert all(not r.is_custom for r in recipes)
    assert crud.list_recipes(db, custom_only=True) == []


def test_seed_from_custom_file(db, tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps([{
        "name": "Negroni",
        "instructions": "Stir with ice.",
        "ingredients": [
            {"name": "Gin", "quantity": "1", "unit": "oz"},
            {"name": "Campari", "quantity": "1", "unit": "oz"},
            {"name": "Sweet Vermouth", "quantity": "1", "unit": "oz"},
        ],
    }]), encoding="utf-8")
    assert seed_standard_recipes(db, load_recipes(path)) == 1
    negroni = crud.get_standard_recipe_by_name(db, "Negroni")
    assert [ri.name for ri in negroni.ingredients] == ["Gin", "Campari", "Sweet Vermouth"]


def test_custom_recipe_with_same_name_does_not_block_seeding(db):
    data = load_recipes()[0]
    crud.create_recipe(db, schemas.RecipeCreate(**data))
    assert seed_standard_recipes(db) == 2
    assert len(crud.list_recipes(db, custom_only=True)) == 1
