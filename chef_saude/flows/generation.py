from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..llm.base import RecipeModel
from ..llm.groq_client import GroqRecipeModel
from ..recipes.models import RecipeGenerationRequest, RecipeListOutput
from .prompts import build_generation_prompt
from .tools import SEARCH_RECIPES_TOOL

logger = logging.getLogger(__name__)


def generate_recipes(
    request: RecipeGenerationRequest,
    model: RecipeModel | None = None,
) -> RecipeListOutput:
    """Generate recipes for the given restrictions. Model errors propagate."""
    model = model or GroqRecipeModel()
    start_time = time.time()

    output = model.generate(build_generation_prompt(request), [SEARCH_RECIPES_TOOL])

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info("Generated %d recipes in %.1f ms", len(output.recipes), elapsed_ms)
    record_event("generation", {
        "restrictions": [r.value for r in request.restrictions],
        "dish_type": request.dish_type.value if request.dish_type else None,
        "ingredients": request.ingredients,
        "results_returned": len(output.recipes),
        "response_time_ms": elapsed_ms,
    })
    return output
