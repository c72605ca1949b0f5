import logging
from pathlib import Path

from letuscook import models
from letuscook.db import SessionLocal, init_db
from letuscook.editor import save_draft
from letuscook.errors import LetUsCookError
from letuscook.recipes import load_recipes

log = logging.getLogger("letuscook.import")


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        print('data/recipes.json not found')
        return
    db = SessionLocal()
    added = 0
    try:
        for draft in load_recipes(p):
            name = draft.name.strip()
            exists = (
                db.query(models.Recipe)
                .filter(models.Recipe.name == name)
                .first()
            )
            if exists:
                continue
            try:
                save_draft(db, draft)
            except LetUsCookError as exc:
                log.warning('skipping %r: %s', draft.name, exc)
                continue
            added += 1
    finally:
        db.close()
    print(f'Imported {added} recipes')


if __name__ == '__main__':
    main()
