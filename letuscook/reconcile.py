"""Replace a recipe's child collections with freshly parsed records.

This is a full replace, not a merge: children carry no identity beyond their
fields, so every save rebuilds them. The previous rows become orphans and are
deleted by the ``delete-orphan`` cascade.
"""

import logging
from typing import Iterable

from sqlalchemy.orm import object_session

from . import models
from .schemas import ParsedIngredient, ParsedInstruction

log = logging.getLogger(__name__)


def _session_for(recipe: models.Recipe):
    db = object_session(recipe)
    if db is None:
        raise RuntimeError(
            "Recipe must be added to a session before its children are "
            "replaced"
        )
    return db


def update_instructions(
    recipe: models.Recipe, instructions: Iterable[ParsedInstruction]
) -> None:
    db = _session_for(recipe)
    ordered = sorted(instructions, key=lambda i: i.index)
    # old rows must be gone before new ones reuse their (recipe, index) keys
    recipe.instructions.clear()
    db.flush()
    recipe.instructions.extend(
        models.Instruction(index=i, text=item.text)
        for i, item in enumerate(ordered)
    )
    log.debug("recipe %s now has %d instructions", recipe.id, len(ordered))


def update_ingredients(
    recipe: models.Recipe, ingredients: Iterable[ParsedIngredient]
) -> None:
    db = _session_for(recipe)
    unique = {}
    for item in ingredients:
        unique.setdefault(item.name, item)
    recipe.ingredients.clear()
    db.flush()
    recipe.ingredients.extend(
        models.Ingredient(name=item.name, quantity=item.quantity)
        for item in unique.values()
    )
    log.debug("recipe %s now has %d ingredients", recipe.id, len(unique))
