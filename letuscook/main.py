import logging

from . import crud
from .config import get_settings
from .db import SessionLocal, init_db


def format_row(recipe):
    return "\n".join([
        f"- {recipe.name}",
        f"    Preparation Time: {recipe.prep_time}",
        f"    Cook: {recipe.cook_time}",
        f"    Comments: {recipe.comments}",
    ])


def main():
    logging.basicConfig(level=get_settings().log_level)
    init_db()
    db = SessionLocal()
    try:
        recipes, total = crud.get_recipes(db, limit=None)
        print(f"Loaded {total} recipe(s).")
        for r in recipes:
            print(format_row(r))
    finally:
        db.close()


if __name__ == "__main__":
    main()
