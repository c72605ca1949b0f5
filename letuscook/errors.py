class LetUsCookError(Exception):
    """Base class for errors raised by the recipe core."""


class RecipeValidationError(LetUsCookError):
    """A draft field failed validation; nothing was written to the store."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class PersistenceError(LetUsCookError):
    """The store rejected a flush or commit; the session was rolled back."""


class RecipeNotFound(LetUsCookError):
    def __init__(self, recipe_id: int):
        super().__init__(f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id
