"""Editing recipes through a staged draft.

Form fields are mirrored in a :class:`RecipeDraft` and only written back to the
store on an explicit save, so the user can discard changes at any point. A
save is one unit: parse, reconcile, commit. Two editors saving the same recipe
is not coordinated; the last save wins.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, models
from .errors import PersistenceError, RecipeValidationError
from .parsing import (
    ingredients_as_string,
    instructions_as_string,
    parse_ingredients,
    parse_instructions,
)
from .reconcile import update_ingredients, update_instructions
from .schemas import RecipeDraft

log = logging.getLogger(__name__)


def draft_from_recipe(recipe: models.Recipe) -> RecipeDraft:
    instructions = sorted(recipe.instructions, key=lambda i: i.index)
    ingredients = sorted(recipe.ingredients, key=lambda i: i.name)
    return RecipeDraft(
        name=recipe.name,
        image_url=recipe.image_url,
        prep_time=recipe.prep_time or "",
        cook_time=recipe.cook_time or "",
        comments=recipe.comments or "",
        categories=sorted(c.name for c in recipe.categories),
        instruction_text=instructions_as_string(instructions),
        ingredient_text=ingredients_as_string(ingredients),
    )


def validate_draft(draft: RecipeDraft) -> str:
    """Return the trimmed name, or raise if there is nothing left."""
    name = (draft.name or "").strip()
    if not name:
        raise RecipeValidationError("name", "Recipe name must not be empty")
    return name


def _apply_scalars(recipe: models.Recipe, draft: RecipeDraft, name: str):
    recipe.name = name
    recipe.image_url = draft.image_url or None
    recipe.prep_time = draft.prep_time or ""
    recipe.cook_time = draft.cook_time or ""
    recipe.comments = draft.comments or ""


def save_draft(
    db: Session,
    draft: RecipeDraft,
    recipe: Optional[models.Recipe] = None,
) -> models.Recipe:
    """Write a draft to the store, creating the recipe when none is given.

    Raises RecipeValidationError before touching the store, and
    PersistenceError (after rolling back) if the store refuses the changes.
    The draft itself is never modified, so a failed save can be retried.
    """
    name = validate_draft(draft)
    instructions = parse_instructions(draft.instruction_text)
    ingredients = parse_ingredients(draft.ingredient_text)

    try:
        if recipe is None:
            recipe = models.Recipe()
            _apply_scalars(recipe, draft, name)
            # the root needs an identity before children can point at it
            crud.insert_recipe(db, recipe)
        else:
            _apply_scalars(recipe, draft, name)
            # child-only edits never UPDATE the recipes row
            recipe.updated_at = models.utcnow()
        recipe.categories = crud.get_or_create_categories(
            db, draft.categories
        )
        update_instructions(recipe, instructions)
        update_ingredients(recipe, ingredients)
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("saving recipe %r failed: %s", name, exc)
        raise PersistenceError(str(exc)) from exc

    crud.commit(db)
    db.refresh(recipe)
    log.info(
        "saved recipe %s (%r): %d instructions, %d ingredients",
        recipe.id, recipe.name, len(instructions), len(ingredients),
    )
    return recipe


class RecipeEditor:
    """Staged draft for one recipe, new when ``recipe`` is None."""

    def __init__(self, db: Session, recipe: Optional[models.Recipe] = None):
        self.db = db
        self.recipe = recipe
        self.draft = self._initial_draft()

    def _initial_draft(self) -> RecipeDraft:
        if self.recipe is None:
            return RecipeDraft()
        return draft_from_recipe(self.recipe)

    @property
    def is_new(self) -> bool:
        return self.recipe is None

    @property
    def has_changes(self) -> bool:
        return self.draft != self._initial_draft()

    def discard(self) -> None:
        self.draft = self._initial_draft()

    def save(self) -> models.Recipe:
        self.recipe = save_draft(self.db, self.draft, self.recipe)
        self.draft = draft_from_recipe(self.recipe)
        return self.recipe
