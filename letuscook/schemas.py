from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedInstruction(BaseModel):
    index: int
    text: str


class ParsedIngredient(BaseModel):
    name: str
    quantity: Optional[str] = None


class RecipeDraft(BaseModel):
    """Editable copy of a recipe; nothing here touches the store until saved."""

    name: str = Field("", json_schema_extra={"example": "Pancakes"})
    image_url: Optional[str] = None
    prep_time: str = Field("", json_schema_extra={"example": "10 min"})
    cook_time: str = Field("", json_schema_extra={"example": "15 min"})
    comments: str = ""
    categories: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["breakfast", "easy"]},
    )
    instruction_text: str = Field(
        "", json_schema_extra={"example": "Mix\nCook\nServe"}
    )
    ingredient_text: str = Field(
        "", json_schema_extra={"example": "Egg\nFlour: 200 g\nMilk"}
    )


class InstructionOut(BaseModel):
    index: int
    text: str

    model_config = ConfigDict(from_attributes=True)


class IngredientOut(BaseModel):
    name: str
    quantity: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RecipeSummary(BaseModel):
    """What a gallery row shows."""

    id: int
    name: str
    image_url: Optional[str] = None
    prep_time: str = ""
    cook_time: str = ""
    comments: str = ""

    model_config = ConfigDict(from_attributes=True)


class Recipe(RecipeSummary):
    categories: List[str] = Field(default_factory=list)
    instructions: List[InstructionOut] = Field(default_factory=list)
    ingredients: List[IngredientOut] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecipePage(BaseModel):
    items: List[RecipeSummary]
    total: int
    page: int
    page_size: int
