import pytest

from letuscook import crud, models
from letuscook.parsing import parse_ingredients, parse_instructions
from letuscook.reconcile import update_ingredients, update_instructions
from letuscook.schemas import ParsedIngredient, ParsedInstruction


def _stored_recipe(db, name="Toast"):
    recipe = models.Recipe(name=name)
    crud.insert_recipe(db, recipe)
    return recipe


def _instructions(db, recipe_id):
    return [
        (i.index, i.text)
        for i in db.query(models.Instruction)
        .filter(models.Instruction.recipe_id == recipe_id)
        .order_by(models.Instruction.index)
    ]


def test_requires_registered_recipe():
    with pytest.raises(RuntimeError):
        update_instructions(models.Recipe(name="Loose"), [])
    with pytest.raises(RuntimeError):
        update_ingredients(models.Recipe(name="Loose"), [])


def test_replaces_existing_instructions(db):
    recipe = _stored_recipe(db)
    update_instructions(recipe, parse_instructions("Slice\nToast\nButter"))
    db.commit()
    update_instructions(recipe, parse_instructions("Just eat it"))
    db.commit()
    assert _instructions(db, recipe.id) == [(0, "Just eat it")]
    assert db.query(models.Instruction).count() == 1


def test_indices_are_made_dense(db):
    recipe = _stored_recipe(db)
    update_instructions(recipe, [
        ParsedInstruction(index=10, text="Second"),
        ParsedInstruction(index=2, text="First"),
    ])
    db.commit()
    assert _instructions(db, recipe.id) == [(0, "First"), (1, "Second")]


def test_reconcile_twice_is_idempotent(db):
    recipe = _stored_recipe(db)
    parsed = parse_instructions("Mix\nCook")
    update_instructions(recipe, parsed)
    db.commit()
    first = _instructions(db, recipe.id)
    update_instructions(recipe, parsed)
    db.commit()
    assert _instructions(db, recipe.id) == first


def test_empty_list_removes_all_children(db):
    recipe = _stored_recipe(db)
    update_instructions(recipe, parse_instructions("Mix\nCook"))
    update_ingredients(recipe, parse_ingredients("Egg\nFlour"))
    db.commit()
    update_instructions(recipe, [])
    update_ingredients(recipe, [])
    db.commit()
    assert db.query(models.Instruction).count() == 0
    assert db.query(models.Ingredient).count() == 0


def test_ingredients_reload_sorted_by_name(db):
    recipe = _stored_recipe(db)
    update_ingredients(recipe, [
        ParsedIngredient(name="Milk"),
        ParsedIngredient(name="Egg", quantity="2"),
        ParsedIngredient(name="Flour"),
        ParsedIngredient(name="Egg", quantity="3"),
    ])
    db.commit()
    db.expire_all()
    reloaded = db.get(models.Recipe, recipe.id)
    assert [(i.name, i.quantity) for i in reloaded.ingredients] == [
        ("Egg", "2"), ("Flour", None), ("Milk", None),
    ]


def test_children_are_not_shared_between_recipes(db):
    first = _stored_recipe(db, "First")
    second = _stored_recipe(db, "Second")
    parsed = parse_instructions("Mix")
    update_instructions(first, parsed)
    update_instructions(second, parsed)
    db.commit()
    update_instructions(first, [])
    db.commit()
    assert _instructions(db, first.id) == []
    assert _instructions(db, second.id) == [(0, "Mix")]
