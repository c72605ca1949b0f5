import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .config import get_settings
from .db import SessionLocal, init_db
from .editor import draft_from_recipe, save_draft
from .errors import PersistenceError, RecipeNotFound, RecipeValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    yield


app = FastAPI(title="LetUsCook", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def recipe_out(recipe: models.Recipe) -> schemas.Recipe:
    return schemas.Recipe(
        id=recipe.id,
        name=recipe.name,
        image_url=recipe.image_url,
        prep_time=recipe.prep_time or "",
        cook_time=recipe.cook_time or "",
        comments=recipe.comments or "",
        categories=sorted(c.name for c in recipe.categories),
        instructions=[
            schemas.InstructionOut.model_validate(i)
            for i in sorted(recipe.instructions, key=lambda i: i.index)
        ],
        ingredients=[
            schemas.IngredientOut.model_validate(i)
            for i in sorted(recipe.ingredients, key=lambda i: i.name)
        ],
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


def load_recipe(db: Session, recipe_id: int) -> models.Recipe:
    recipe = crud.get_recipe(db, recipe_id)
    if recipe is None:
        raise RecipeNotFound(recipe_id)
    return recipe


def save_or_raise(db, draft, recipe=None) -> models.Recipe:
    """Run the editor save and translate core errors into HTTP errors."""
    try:
        return save_draft(db, draft, recipe)
    except RecipeValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail={"field": exc.field, "message": exc.message},
        )
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Could not save recipe")


def get_recipe_or_404(recipe_id: int, db: Session = Depends(get_db)):
    try:
        return load_recipe(db, recipe_id)
    except RecipeNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))


def _link_header(request: Request, page, page_size, total):
    links = []
    last_page = max(1, -(-total // page_size))
    if page > 1:
        url = request.url.include_query_params(page=page - 1)
        links.append(f'<{url}>; rel="prev"')
    if page < last_page:
        url = request.url.include_query_params(page=page + 1)
        links.append(f'<{url}>; rel="next"')
    return ", ".join(links)


@app.get("/api/recipes", response_model=schemas.RecipePage)
def list_recipes(
    request: Request,
    response: Response,
    q: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
):
    if page < 1 or page_size < 1:
        raise HTTPException(
            status_code=400, detail="page and page_size must be positive"
        )
    items, total = crud.get_recipes(
        db, skip=(page - 1) * page_size, limit=page_size,
        q=q, category=category,
    )
    response.headers["Link"] = _link_header(request, page, page_size, total)
    return {
        "items": [schemas.RecipeSummary.model_validate(r) for r in items],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@app.get("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def get_recipe(recipe: models.Recipe = Depends(get_recipe_or_404)):
    return recipe_out(recipe)


@app.get("/api/recipes/{recipe_id}/draft", response_model=schemas.RecipeDraft)
def get_recipe_draft(recipe: models.Recipe = Depends(get_recipe_or_404)):
    return draft_from_recipe(recipe)


@app.post("/api/recipes", response_model=schemas.Recipe)
def create_recipe(draft: schemas.RecipeDraft, db: Session = Depends(get_db)):
    return recipe_out(save_or_raise(db, draft))


@app.put("/api/recipes/{recipe_id}", response_model=schemas.Recipe)
def update_recipe(
    draft: schemas.RecipeDraft,
    recipe: models.Recipe = Depends(get_recipe_or_404),
    db: Session = Depends(get_db),
):
    return recipe_out(save_or_raise(db, draft, recipe))


@app.delete("/api/recipes/{recipe_id}")
def delete_recipe(recipe_id: int, db: Session = Depends(get_db)):
    try:
        deleted = crud.delete_recipe(db, recipe_id)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Could not delete recipe")
    if not deleted:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"deleted": True}


@app.get("/api/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return [c.name for c in crud.get_categories(db)]


def draft_from_form(
    name: str = Form(...),
    image_url: str = Form(""),
    prep_time: str = Form(""),
    cook_time: str = Form(""),
    comments: str = Form(""),
    categories: str = Form(""),
    instructions: str = Form(""),
    ingredients: str = Form(""),
) -> schemas.RecipeDraft:
    # categories arrive comma-separated from the form
    return schemas.RecipeDraft(
        name=name,
        image_url=image_url or None,
        prep_time=prep_time,
        cook_time=cook_time,
        comments=comments,
        categories=[c for c in categories.split(",") if c.strip()],
        instruction_text=instructions,
        ingredient_text=ingredients,
    )


@app.post("/recipes")
def create_recipe_form(
    draft: schemas.RecipeDraft = Depends(draft_from_form),
    db: Session = Depends(get_db),
):
    recipe = save_or_raise(db, draft)
    return RedirectResponse(f"/api/recipes/{recipe.id}", status_code=303)


@app.post("/recipes/{recipe_id}/edit")
def edit_recipe_form(
    draft: schemas.RecipeDraft = Depends(draft_from_form),
    recipe: models.Recipe = Depends(get_recipe_or_404),
    db: Session = Depends(get_db),
):
    recipe = save_or_raise(db, draft, recipe)
    return RedirectResponse(f"/api/recipes/{recipe.id}", status_code=303)


@app.post("/recipes/{recipe_id}/delete")
def delete_recipe_form(recipe_id: int, db: Session = Depends(get_db)):
    delete_recipe(recipe_id, db)
    return RedirectResponse("/api/recipes", status_code=303)
