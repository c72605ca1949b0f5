import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .errors import PersistenceError

log = logging.getLogger(__name__)


def get_recipe(db: Session, recipe_id: int):
    return db.get(models.Recipe, recipe_id)


def _recipe_query(db: Session, q: Optional[str], category: Optional[str]):
    query = db.query(models.Recipe)
    if q:
        query = query.filter(models.Recipe.name.ilike(f"%{q}%"))
    if category:
        query = query.filter(
            models.Recipe.categories.any(models.Category.name == category)
        )
    return query


def get_recipes(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    q: Optional[str] = None,
    category: Optional[str] = None,
) -> Tuple[List[models.Recipe], int]:
    """Return one page of recipes ordered by name, plus the total count."""
    query = _recipe_query(db, q, category)
    total = query.count()
    items = (
        query.order_by(models.Recipe.name, models.Recipe.id)
        .offset(skip)
        .limit(limit)
        .all()
    )
    return items, total


def get_categories(db: Session) -> List[models.Category]:
    return db.query(models.Category).order_by(models.Category.name).all()


def get_or_create_categories(
    db: Session, names: Iterable[str]
) -> List[models.Category]:
    """Resolve label names to shared Category rows, creating missing ones."""
    wanted = []
    for name in names:
        name = (name or "").strip()
        if name and name not in wanted:
            wanted.append(name)
    if not wanted:
        return []
    existing = {
        c.name: c
        for c in db.query(models.Category)
        .filter(models.Category.name.in_(wanted))
        .all()
    }
    categories = []
    for name in wanted:
        category = existing.get(name)
        if category is None:
            category = models.Category(name=name)
            db.add(category)
            log.info("created category %r", name)
        categories.append(category)
    return categories


def insert_recipe(db: Session, recipe: models.Recipe) -> models.Recipe:
    """Register a new root so children can be attached to it."""
    db.add(recipe)
    db.flush()
    return recipe


def commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("commit failed: %s", exc)
        raise PersistenceError(str(exc)) from exc


def delete_recipe(db: Session, recipe_id: int):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return False
    db.delete(db_recipe)
    commit(db)
    log.info("deleted recipe %s", recipe_id)
    return True
