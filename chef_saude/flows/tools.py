from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..llm.base import Tool
from ..recipes.catalog import search_recipes
from ..recipes.models import DietaryRestriction, DishType


class SearchRecipesInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restrictions: list[DietaryRestriction] = Field(
        ...,
        description="The dietary restrictions to consider when searching for recipes.",
    )
    dish_type: DishType | None = Field(
        default=None,
        alias="dishType",
        description="The type of dish to search for (doce or salgado).",
    )


def _search_recipes_handler(arguments: SearchRecipesInput) -> list[dict[str, Any]]:
    recipes = search_recipes(arguments.restrictions, arguments.dish_type)
    return [r.model_dump(by_alias=True, exclude={"id"}) for r in recipes]


SEARCH_RECIPES_TOOL = Tool(
    name="searchRecipes",
    description="Search for recipes based on dietary restrictions.",
    input_model=SearchRecipesInput,
    handler=_search_recipes_handler,
)
