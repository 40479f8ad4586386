from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from chef_saude.analytics.store import clear_events, get_events
from chef_saude.flows.generation import generate_recipes
from chef_saude.flows.prompts import (
    MIXED_DISH_TYPES_PT,
    build_generation_prompt,
    build_search_prompt,
)
from chef_saude.flows.search import MAX_ATTEMPTS, intelligent_recipe_search
from chef_saude.flows.tools import SEARCH_RECIPES_TOOL
from chef_saude.recipes.models import (
    DietaryRestriction,
    DishType,
    Recipe,
    RecipeGenerationRequest,
    RecipeListOutput,
    RecipeSearchRequest,
)


def _output(*titles: str, note: str = "") -> RecipeListOutput:
    return RecipeListOutput(recipes=[
        Recipe(title=t, ingredients=["água"], instructions=f"Prepare {t}. {note}", sourceUrl="https://example.com")
        for t in titles
    ])


SEARCH_REQUEST = RecipeSearchRequest(restrictions=[DietaryRestriction.vegan])


# ── Prompts ──────────────────────────────────────────────────────────────


class TestPrompts:
    def test_generation_prompt_lists_restrictions(self):
        req = RecipeGenerationRequest(
            restrictions=[DietaryRestriction.celiac_disease, DietaryRestriction.gout],
        )
        prompt = build_generation_prompt(req)
        assert "Doença Celíaca, Gota" in prompt
        assert MIXED_DISH_TYPES_PT in prompt
        assert "ingredientes:" not in prompt

    def test_generation_prompt_with_ingredients_and_dish_type(self):
        req = RecipeGenerationRequest(
            restrictions=[DietaryRestriction.vegan],
            ingredients="abóbora, gengibre",
            dishType="salgado",
        )
        prompt = build_generation_prompt(req)
        assert "abóbora, gengibre" in prompt
        assert "receitas do tipo: salgado" in prompt
        assert MIXED_DISH_TYPES_PT not in prompt

    def test_search_prompt_with_recipe_name(self):
        req = RecipeSearchRequest(
            restrictions=[DietaryRestriction.lactose_intolerance],
            recipeName="Lasanha",
            dishType="salgado",
        )
        prompt = build_search_prompt(req)
        assert "Recipe Name: Lasanha" in prompt
        assert "Dish Type: salgado" in prompt
        assert "Intolerância à Lactose" in prompt


# ── Tool ─────────────────────────────────────────────────────────────────


class TestSearchRecipesTool:
    def test_tool_filters_by_dish_type(self):
        result = SEARCH_RECIPES_TOOL.invoke({"restrictions": ["Vegano"], "dishType": "doce"})
        assert [r["title"] for r in result] == [
            "Mousse de Chocolate Vegano",
            "Smoothie de Frutas Vermelhas sem Lactose",
        ]
        assert "sourceUrl" in result[0]
        assert "id" not in result[0]

    def test_tool_schema(self):
        schema = SEARCH_RECIPES_TOOL.as_schema()
        assert schema["type"] == "function"
        assert schema["function"]["name"] == "searchRecipes"
        assert "dishType" in schema["function"]["parameters"]["properties"]
        assert "restrictions" in schema["function"]["parameters"]["required"]
        assert "dishType" not in schema["function"]["parameters"]["required"]


# ── Generation ───────────────────────────────────────────────────────────


def test_generate_recipes_passes_prompt_and_tool():
    clear_events()
    model = MagicMock()
    model.generate.return_value = _output("Bolo de Cenoura")
    req = RecipeGenerationRequest(restrictions=[DietaryRestriction.diabetes], dishType=DishType.doce)

    result = generate_recipes(req, model=model)

    assert result.titles() == ["Bolo de Cenoura"]
    prompt, tools = model.generate.call_args.args
    assert "Diabetes Mellitus" in prompt
    assert tools == [SEARCH_RECIPES_TOOL]
    assert len(get_events("generation")) == 1


def test_generate_recipes_propagates_errors():
    model = MagicMock()
    model.generate.side_effect = RuntimeError("quota exceeded")
    req = RecipeGenerationRequest(restrictions=[DietaryRestriction.vegan])

    with pytest.raises(RuntimeError, match="quota exceeded"):
        generate_recipes(req, model=model)


# ── Intelligent search / uniqueness retry ────────────────────────────────


class TestUniquenessRetry:
    def test_first_result_accepted_without_history(self):
        model = MagicMock()
        model.generate.return_value = _output("Sopa", "Salada")

        outcome = intelligent_recipe_search(SEARCH_REQUEST, model=model)

        assert model.generate.call_count == 1
        assert outcome.unique
        assert outcome.attempts == 1
        assert outcome.previous_titles == ("Sopa", "Salada")

    def test_retries_until_unique(self):
        model = MagicMock()
        model.generate.side_effect = [
            _output("Sopa", "Salada"),
            _output("Salada", "Mousse"),
            _output("Risoto", "Mousse"),
        ]

        outcome = intelligent_recipe_search(SEARCH_REQUEST, previous_titles=["Sopa", "Salada"], model=model)

        assert model.generate.call_count == 3
        assert outcome.unique
        assert outcome.output.titles() == ["Risoto", "Mousse"]
        assert outcome.previous_titles == ("Risoto", "Mousse")

    def test_gives_up_after_max_attempts(self, caplog):
        outputs = [_output("Sopa", "Salada", note=str(i)) for i in range(MAX_ATTEMPTS + 2)]
        model = MagicMock()
        model.generate.side_effect = outputs

        with caplog.at_level(logging.WARNING, logger="chef_saude.flows.search"):
            outcome = intelligent_recipe_search(SEARCH_REQUEST, previous_titles=["Sopa"], model=model)

        assert MAX_ATTEMPTS == 5
        assert model.generate.call_count == 5
        assert outcome.output is outputs[4]
        assert not outcome.unique
        assert outcome.attempts == 5
        # History is kept when no unique result was found
        assert outcome.previous_titles == ("Sopa",)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Maximum attempts" in warnings[0].getMessage()

    def test_same_prompt_on_every_attempt(self):
        model = MagicMock()
        model.generate.return_value = _output("Sopa")

        intelligent_recipe_search(SEARCH_REQUEST, previous_titles=["Sopa"], model=model)

        prompts = {c.args[0] for c in model.generate.call_args_list}
        assert len(prompts) == 1

    def test_empty_result_is_unique(self):
        model = MagicMock()
        model.generate.return_value = RecipeListOutput(recipes=[])

        outcome = intelligent_recipe_search(SEARCH_REQUEST, previous_titles=["Sopa"], model=model)

        assert outcome.unique
        assert outcome.previous_titles == ()

    def test_errors_propagate_unchanged(self):
        model = MagicMock()
        error = ConnectionError("groq unavailable")
        model.generate.side_effect = error

        with pytest.raises(ConnectionError) as exc_info:
            intelligent_recipe_search(SEARCH_REQUEST, model=model)
        assert exc_info.value is error

    def test_records_search_event(self):
        clear_events()
        model = MagicMock()
        model.generate.return_value = _output("Sopa")

        intelligent_recipe_search(SEARCH_REQUEST, previous_titles=["Sopa"], model=model)

        events = get_events("search")
        assert len(events) == 1
        assert events[0]["attempts"] == 5
        assert events[0]["unique"] is False
