from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from groq import Groq
from pydantic import ValidationError

from ..recipes.models import RecipeListOutput
from .base import Tool
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Chef Saúde, a cooking assistant for people with dietary restrictions. "
    "You may call the provided tools to look up existing recipes before answering.\n\n"
    "When you answer, return ONLY valid JSON in this exact format:\n"
    '{"recipes": [{"title": "<recipe title>", '
    '"ingredients": ["<ingredient>", "..."], '
    '"instructions": "<preparation steps>", '
    '"sourceUrl": "<url where the recipe was found>", '
    '"nutritionalInformation": "<optional nutritional summary>"}]}\n'
    "Write recipe content in Brazilian Portuguese."
)


class RecipeModelError(RuntimeError):
    """The model answered with something that is not a recipe list."""


def _strip_code_fence(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_recipe_output(content: str | None) -> RecipeListOutput:
    """Validate the model's final message against the recipe list schema."""
    if not content:
        raise RecipeModelError("Model returned an empty response")
    try:
        parsed = json.loads(_strip_code_fence(content))
    except json.JSONDecodeError as exc:
        raise RecipeModelError(f"Model returned invalid JSON: {exc}") from exc
    try:
        return RecipeListOutput.model_validate(parsed)
    except ValidationError as exc:
        raise RecipeModelError(f"Model output does not match the recipe schema: {exc}") from exc


def _run_tool(tools_by_name: dict[str, Tool], name: str, raw_arguments: str | None) -> str:
    tool = tools_by_name.get(name)
    if tool is None:
        logger.warning("Model requested unknown tool %r", name)
        return json.dumps({"error": f"unknown tool {name}"})
    try:
        arguments = json.loads(raw_arguments or "{}")
        result = tool.invoke(arguments)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Rejected arguments for tool %r", name, exc_info=True)
        return json.dumps({"error": str(exc)})
    return json.dumps(result, ensure_ascii=False, default=str)


class GroqRecipeModel:
    """Answer recipe prompts with Groq chat completions and tool calling."""

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config

    def _client(self) -> Groq:
        return Groq(api_key=self.config.api_key, timeout=self.config.timeout)

    def generate(self, prompt: str, tools: Sequence[Tool] = ()) -> RecipeListOutput:
        if not self.config.enabled or not self.config.api_key:
            raise RecipeModelError("Groq LLM is disabled or GROQ_API_KEY is not set")

        client = self._client()
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        tools_by_name = {t.name: t for t in tools}
        tool_schemas = [t.as_schema() for t in tools]

        for _ in range(self.config.max_tool_rounds if tools else 0):
            response = client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                tools=tool_schemas,
                tool_choice="auto",
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
            message = response.choices[0].message
            tool_calls = message.tool_calls or []
            if not tool_calls:
                return parse_recipe_output(message.content)

            messages.append({
                "role": "assistant",
                "content": message.content or "",
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {
                            "name": call.function.name,
                            "arguments": call.function.arguments,
                        },
                    }
                    for call in tool_calls
                ],
            })
            for call in tool_calls:
                logger.info("Running tool %s for the model", call.function.name)
                messages.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "name": call.function.name,
                    "content": _run_tool(tools_by_name, call.function.name, call.function.arguments),
                })

        # No tools, or the tool budget ran out: ask for the final JSON answer.
        response = client.chat.completions.create(
            model=self.config.model,
            messages=messages,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            response_format={"type": "json_object"},
        )
        return parse_recipe_output(response.choices[0].message.content)
