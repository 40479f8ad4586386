from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel

from ..recipes.models import RecipeListOutput


@dataclass(frozen=True)
class Tool:
    """A function the model may call, described by a pydantic input model."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any], Any]

    def invoke(self, arguments: dict[str, Any]) -> Any:
        return self.handler(self.input_model.model_validate(arguments))

    def as_schema(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(),
            },
        }


class RecipeModel(Protocol):
    """Anything that can answer a recipe prompt with a recipe list."""

    def generate(self, prompt: str, tools: Sequence[Tool] = ()) -> RecipeListOutput: ...
