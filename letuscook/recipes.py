import json
from pathlib import Path

from .schemas import RecipeDraft


def _as_text(value):
    if isinstance(value, (list, tuple)):
        return "\n".join(str(v) for v in value)
    return value or ""


def draft_from_dict(data):
    """Build a draft from a JSON object.

    ``instructions``/``steps`` and ``ingredients`` may be lists of lines or a
    single text block.
    """
    instructions = data.get("instructions", data.get("steps"))
    return RecipeDraft(
        name=data.get("name") or "",
        image_url=data.get("image_url"),
        prep_time=data.get("prep_time") or "",
        cook_time=data.get("cook_time") or "",
        comments=data.get("comments") or "",
        categories=list(data.get("categories") or []),
        instruction_text=_as_text(instructions),
        ingredient_text=_as_text(data.get("ingredients")),
    )


def load_recipes(path):
    """Load recipe drafts from a JSON file.

    Args:
        path (str or Path): Path to the JSON file holding a list of recipes.

    Returns:
        list: list of RecipeDraft, empty when the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return [draft_from_dict(r) for r in json.load(f)]
