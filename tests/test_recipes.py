import json

from letuscook.editor import save_draft
from letuscook.main import format_row
from letuscook.recipes import draft_from_dict, load_recipes


def test_missing_file_gives_no_recipes(tmp_path):
    assert load_recipes(tmp_path / "nope.json") == []


def test_load_recipes_accepts_lists_and_text(tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps([
        {
            "name": "Simple Pancakes",
            "ingredients": ["flour", "milk", "egg"],
            "steps": ["Mix", "Cook"],
        },
        {
            "name": "Tea",
            "ingredient_text": "ignored",
            "ingredients": "Water\nTea bag",
            "instructions": "Boil\nSteep",
            "categories": ["drinks"],
            "cook_time": "5 min",
        },
    ]), encoding="utf-8")
    pancakes, tea = load_recipes(path)
    assert pancakes.ingredient_text == "flour\nmilk\negg"
    assert pancakes.instruction_text == "Mix\nCook"
    assert tea.instruction_text == "Boil\nSteep"
    assert tea.ingredient_text == "Water\nTea bag"
    assert tea.categories == ["drinks"]
    assert tea.cook_time == "5 min"


def test_gallery_row_shows_times_and_comments(db):
    draft = draft_from_dict({
        "name": "Soup",
        "prep_time": "5 min",
        "cook_time": "1 h",
        "comments": "Better the next day",
    })
    row = format_row(save_draft(db, draft))
    assert row.splitlines() == [
        "- Soup",
        "    Preparation Time: 5 min",
        "    Cook: 1 h",
        "    Comments: Better the next day",
    ]
