import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from . import availability, crud, errors, schemas
from .config import settings
from .db import SessionLocal, init_db
from .logging_config import setup_logging
from .seed import seed_standard_recipes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.collation_locale:
        availability.set_collation_locale(settings.collation_locale)
    # Initialize DB once at startup
    init_db()
    if settings.seed_standard_recipes:
        db = SessionLocal()
        try:
            seed_standard_recipes(db)
        finally:
            db.close()
    logger.info("%s ready", settings.app_name)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@app.exception_handler(errors.BartenderError)
async def bartender_error_handler(request: Request, exc: errors.BartenderError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # report body problems as 400 with the first readable message
    messages = []
    for err in exc.errors():
        msg = err.get("msg", "")
        messages.append(msg.removeprefix("Value error, "))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": messages[0] if messages else "Invalid request.", "details": messages},
    )


@app.get("/", response_class=PlainTextResponse)
def read_root():
    return f"{settings.app_name} server is running!"


# == Ingredients ==

@app.get("/api/ingredients", response_model=List[schemas.Ingredient])
def api_list_ingredients(db: Session = Depends(get_db)):
    return crud.list_ingredients(db)


@app.post("/api/ingredients", response_model=schemas.Ingredient, status_code=status.HTTP_201_CREATED)
def api_add_ingredient(ingredient: schemas.IngredientCreate, db: Session = Depends(get_db)):
    return crud.add_ingredient(db, ingredient)


@app.get("/api/ingredients/suggestions", response_model=List[str])
def api_ingredient_suggestions(db: Session = Depends(get_db)):
    recipes = crud.list_recipes(db)
    return availability.suggest_ingredients(recipes, crud.list_ingredients(db))


@app.delete("/api/ingredients/{ingredient_id}", response_model=schemas.Ingredient)
def api_delete_ingredient(ingredient_id: str, db: Session = Depends(get_db)):
    return crud.delete_ingredient(db, schemas.parse_id(ingredient_id, "ingredient ID"))


# == Recipes ==

@app.get("/api/recipes", response_model=List[schemas.Recipe])
def api_list_recipes(custom_only: bool = False, db: Session = Depends(get_db)):
    return crud.list_recipes(db, custom_only=custom_only)


@app.get("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def api_get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    r = crud.get_recipe(db, schemas.parse_id(recipe_id, "recipe ID"))
    if r is None:
        raise errors.NotFoundError("Recipe not found.")
    return r


@app.post("/api/recipes", response_model=schemas.Recipe, status_code=status.HTTP_201_CREATED)
def api_create_recipe(recipe: schemas.RecipeCreate, db: Session = Depends(get_db)):
    return crud.create_recipe(db, recipe)


@app.delete("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def api_delete_recipe(recipe_id: str, db: Session = Depends(get_db)):
    return crud.delete_recipe(db, schemas.parse_id(recipe_id, "recipe ID"))


@app.post("/api/match", response_model=schemas.MatchResponse)
def api_match(payload: schemas.MatchRequest, db: Session = Depends(get_db)):
    if payload.ingredients is None:
        have = [i.name for i in crud.list_ingredients(db)]
    else:
        have = [h.strip() for h in payload.ingredients if h and h.strip()]

    recipes = availability.filter_recipes(
        crud.list_recipes(db),
        have,
        search_term=payload.search,
        only_makeable=payload.only_makeable,
    )
    return {"have": have, "results": availability.match_recipes(recipes, have)}
