from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass

from ..analytics.store import record_event
from ..llm.base import RecipeModel
from ..llm.groq_client import GroqRecipeModel
from ..recipes.models import RecipeListOutput, RecipeSearchRequest
from .prompts import build_search_prompt
from .tools import SEARCH_RECIPES_TOOL

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5


@dataclass(frozen=True)
class SearchOutcome:
    output: RecipeListOutput
    # Titles the caller should pass back as ``previous_titles`` next time.
    previous_titles: tuple[str, ...]
    attempts: int
    unique: bool


def _overlaps(output: RecipeListOutput, previous: set[str]) -> bool:
    return any(title in previous for title in output.titles())


def intelligent_recipe_search(
    request: RecipeSearchRequest,
    previous_titles: Iterable[str] = (),
    model: RecipeModel | None = None,
) -> SearchOutcome:
    """
    Search recipes through the model, retrying while results repeat.

    The model is called again with the same prompt while any returned title
    is in ``previous_titles``, for at most ``MAX_ATTEMPTS`` calls in total.
    When every attempt repeats, the last result is returned unchanged and the
    previous titles are kept. Model errors propagate.
    """
    model = model or GroqRecipeModel()
    previous_titles = tuple(previous_titles)
    previous = set(previous_titles)
    prompt = build_search_prompt(request)
    tools = [SEARCH_RECIPES_TOOL]
    start_time = time.time()

    output = model.generate(prompt, tools)
    attempts = 1
    while _overlaps(output, previous) and attempts < MAX_ATTEMPTS:
        logger.info("Search attempt %d repeated previous recipes, retrying", attempts)
        output = model.generate(prompt, tools)
        attempts += 1

    unique = not _overlaps(output, previous)
    if unique:
        next_titles = tuple(output.titles())
    else:
        logger.warning(
            "Maximum attempts reached (%d). Could not generate unique recipes.", attempts,
        )
        next_titles = previous_titles

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "restrictions": [r.value for r in request.restrictions],
        "dish_type": request.dish_type.value if request.dish_type else None,
        "recipe_name": request.recipe_name,
        "results_returned": len(output.recipes),
        "attempts": attempts,
        "unique": unique,
        "response_time_ms": elapsed_ms,
    })
    return SearchOutcome(
        output=output, previous_titles=next_titles, attempts=attempts, unique=unique,
    )
