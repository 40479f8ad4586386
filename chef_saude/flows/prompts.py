from __future__ import annotations

from ..recipes.models import DietaryRestriction, RecipeGenerationRequest, RecipeSearchRequest

MIXED_DISH_TYPES_PT = (
    "Como o usuário não especificou o tipo de prato, inclua pelo menos duas "
    "receitas doces e duas salgadas."
)


def _join_restrictions(restrictions: list[DietaryRestriction]) -> str:
    return ", ".join(r.value for r in restrictions)


def build_generation_prompt(request: RecipeGenerationRequest) -> str:
    lines = [
        "Você é um especialista em culinária saudável e adaptada a restrições alimentares.",
        "",
        f"O usuário tem as seguintes restrições alimentares: {_join_restrictions(request.restrictions)}.",
    ]
    if request.ingredients:
        lines.append(f"O usuário quer incluir os seguintes ingredientes: {request.ingredients}")
    if request.dish_type:
        lines.append(f"O usuário prefere receitas do tipo: {request.dish_type.value}")
    else:
        lines.append(MIXED_DISH_TYPES_PT)
    lines.extend([
        "",
        "Sua tarefa é gerar receitas que atendam a essas restrições, use os ingredientes, "
        "e seja do tipo especificado. Se necessário, use a ferramenta searchRecipes para "
        "encontrar receitas existentes e adaptá-las.",
        "A saída deve ser um array de receitas que atendam as restrições do usuário.",
    ])
    return "\n".join(lines)


def build_search_prompt(request: RecipeSearchRequest) -> str:
    lines = [
        "You are a recipe adaptation expert. A user with certain dietary restrictions wants "
        "to find recipes online and adapt them to their needs. If the user specifies the "
        "recipe, then search specifically for that. Then adapt the recipe according to the "
        "restrictions. If the user has not specified a recipe, use the searchRecipes tool "
        "to generate some recipes according to the dietary restrictions.",
        "",
        f"Restrictions: {_join_restrictions(request.restrictions)}",
        f"Recipe Name: {request.recipe_name or ''}",
        "",
    ]
    if request.dish_type:
        lines.append(f"Dish Type: {request.dish_type.value}")
    else:
        lines.append(
            "Como o usuário não especificou o tipo de prato, retorne ao menos duas "
            "receitas doces e duas salgadas."
        )
    lines.extend([
        "",
        "Here are some recipes that adhere to these restrictions, use the searchRecipes "
        "tool to find recipes that meet the dietary restrictions.",
    ])
    return "\n".join(lines)
