import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import errors

ID_PATTERN = re.compile(r"^\d+$")
# largest id a BIGINT primary key can hold
MAX_ID = 2**63 - 1


def _required(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def parse_id(raw: str, kind: str = "ID") -> int:
    """Turn a path segment into a row id, rejecting non-numeric or out-of-range values."""
    if not ID_PATTERN.match(raw or ""):
        raise errors.ValidationError(f"Invalid {kind} format.")
    value = int(raw)
    if value > MAX_ID:
        raise errors.ValidationError(f"Invalid {kind} format.")
    return value


class IngredientCreate(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Lime Juice"})

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return _required(v, "Ingredient name is required.")


class Ingredient(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class RecipeIngredientBase(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Tequila"})
    quantity: str = Field(..., json_schema_extra={"example": "2"})
    unit: Optional[str] = Field(default="", json_schema_extra={"example": "oz"})


class RecipeIngredientCreate(RecipeIngredientBase):
    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return _required(v, "Each ingredient must have a name.")

    @field_validator("quantity")
    @classmethod
    def strip_quantity(cls, v):
        return _required(v, "Each ingredient must have a quantity.")

    @field_validator("unit")
    @classmethod
    def strip_unit(cls, v):
        return (v or "").strip()


class RecipeIngredient(RecipeIngredientBase):
    unit: str = ""

    model_config = ConfigDict(from_attributes=True)


class RecipeCreate(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Margarita"})
    instructions: str = Field(
        ...,
        json_schema_extra={"example": "Shake with ice and strain into a salt-rimmed glass."},
    )
    ingredients: List[RecipeIngredientCreate] = Field(
        ...,
        min_length=1,
        json_schema_extra={
            "example": [
                {"name": "Tequila", "quantity": "2", "unit": "oz"},
                {"name": "Lime Juice", "quantity": "1", "unit": "oz"},
                {"name": "Triple Sec", "quantity": "1", "unit": "oz"},
            ]
        },
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return _required(v, "Recipe name is required.")

    @field_validator("instructions")
    @classmethod
    def strip_instructions(cls, v):
        return _required(v, "Recipe instructions are required.")


class Recipe(BaseModel):
    id: int
    name: str
    instructions: str
    is_custom: bool = Field(..., serialization_alias="isCustom")
    ingredients: List[RecipeIngredient] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MatchRequest(BaseModel):
    # None means "use the stored inventory"
    ingredients: Optional[List[str]] = None
    search: str = ""
    only_makeable: bool = False


class MatchResult(BaseModel):
    id: int
    name: str
    match: bool
    matched: List[str]
    missing: List[str]
    matched_count: int
    missing_count: int


class MatchResponse(BaseModel):
    have: List[str]
    results: List[MatchResult]
