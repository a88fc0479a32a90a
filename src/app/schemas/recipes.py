from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from src.app.domain.models import UNSET, Recipe, RecipeChanges, RecipeDraft

RecipeStatusValue = Literal["pending", "approved", "rejected"]

# ingredients/steps arrive as a newline-delimited block; lists are accepted too
LinesInput = Union[str, list[str]]
NumberInput = Union[int, str]


class RecipeResponse(BaseModel):
    id: int
    title: str
    description: str
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    imageUrl: Optional[str] = None
    category: str
    submittedBy: Optional[str] = None
    prepTime: Optional[int] = None
    cookTime: Optional[int] = None
    serves: Optional[int] = None
    likes: int = 0
    status: RecipeStatusValue
    createdAt: Optional[str] = None


class RecipeSubmitRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[LinesInput] = None
    steps: Optional[LinesInput] = None
    imageUrl: Optional[str] = None
    category: Optional[str] = None
    submittedBy: Optional[str] = None
    prepTime: Optional[NumberInput] = None
    cookTime: Optional[NumberInput] = None
    serves: Optional[NumberInput] = None

    def to_draft(self) -> RecipeDraft:
        return RecipeDraft(
            title=self.title,
            description=self.description,
            ingredients=self.ingredients,
            steps=self.steps,
            image_url=self.imageUrl,
            category=self.category,
            submitted_by=self.submittedBy,
            prep_time=self.prepTime,
            cook_time=self.cookTime,
            serves=self.serves,
        )


class RecipeSubmitResponse(BaseModel):
    message: str = "Recipe submitted for review"
    recipeId: int
    status: RecipeStatusValue = "pending"


class RecipeUpdateRequest(BaseModel):
    """Admin edit. Only the keys present in the request body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[LinesInput] = None
    steps: Optional[LinesInput] = None
    imageUrl: Optional[str] = None
    category: Optional[str] = None
    submittedBy: Optional[str] = None
    prepTime: Optional[NumberInput] = None
    cookTime: Optional[NumberInput] = None
    serves: Optional[NumberInput] = None
    status: Optional[str] = None

    def to_changes(self) -> RecipeChanges:
        present = self.model_fields_set

        def pick(name: str):
            return getattr(self, name) if name in present else UNSET

        return RecipeChanges(
            title=pick("title"),
            description=pick("description"),
            ingredients=pick("ingredients"),
            steps=pick("steps"),
            image_url=pick("imageUrl"),
            category=pick("category"),
            submitted_by=pick("submittedBy"),
            prep_time=pick("prepTime"),
            cook_time=pick("cookTime"),
            serves=pick("serves"),
            status=pick("status"),
        )


class RecipeUpdateResponse(BaseModel):
    id: int
    message: str = "Recipe updated"
    recipe: RecipeResponse


class RecipeDeleteResponse(BaseModel):
    id: int
    message: str = "Recipe deleted"


def recipe_to_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        ingredients=list(recipe.ingredients),
        steps=list(recipe.steps),
        imageUrl=recipe.image_url,
        category=recipe.category.value,
        submittedBy=recipe.submitted_by,
        prepTime=recipe.prep_time,
        cookTime=recipe.cook_time,
        serves=recipe.serves,
        likes=recipe.likes,
        status=recipe.status.value,
        createdAt=recipe.created_at.isoformat() if recipe.created_at else None,
    )
