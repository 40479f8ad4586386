from __future__ import annotations

from collections.abc import Iterable

from .models import DietaryRestriction, DishType, Recipe

# Title keywords that mark a dish as sweet. Anything else counts as savory.
SWEET_KEYWORDS: tuple[str, ...] = ("doce", "mousse", "smoothie")

_CATALOG: list[Recipe] = [
    Recipe(
        id="arroz-frango-legumes",
        title="Arroz com Frango e Legumes (Sem Glúten e Lactose)",
        ingredients=[
            "1 xícara de arroz branco",
            "200g de peito de frango em cubos",
            "1/2 xícara de brócolis picado",
            "1/2 xícara de cenoura em cubos pequenos",
            "1/4 de cebola picada",
            "1 dente de alho picado",
            "Azeite de oliva a gosto",
            "Sal e temperos a gosto",
        ],
        instructions=(
            "Cozinhe o arroz conforme as instruções. Em uma panela, refogue a cebola e o alho "
            "no azeite, adicione o frango e tempere. Acrescente os legumes e refogue por mais "
            "alguns minutos. Misture o frango com legumes ao arroz cozido e sirva."
        ),
        source_url="https://www.example.com/arroz-frango-legumes",
        nutritional_information="Calorias: 350, Proteínas: 25g, Carboidratos: 45g",
    ),
    Recipe(
        id="sopa-abobora-gengibre",
        title="Sopa Cremosa de Abóbora e Gengibre (Vegana)",
        ingredients=[
            "500g de abóbora em cubos",
            "1 pedaço pequeno de gengibre ralado",
            "1/2 cebola picada",
            "500ml de caldo de legumes",
            "1/2 xícara de leite de coco",
            "Azeite de oliva a gosto",
            "Sal e pimenta a gosto",
            "Sementes de abóbora para decorar",
        ],
        instructions=(
            "Refogue a cebola e o gengibre no azeite. Adicione a abóbora e o caldo de legumes, "
            "cozinhe até a abóbora ficar macia. Bata a sopa no liquidificador, adicione o leite "
            "de coco e tempere. Sirva com sementes de abóbora."
        ),
        source_url="https://www.example.com/sopa-abobora-gengibre",
        nutritional_information="Calorias: 200, Proteínas: 5g, Carboidratos: 30g",
    ),
    Recipe(
        id="salada-quinoa-grao-de-bico",
        title="Salada Fresca de Quinoa com Grão de Bico (Sem Glúten)",
        ingredients=[
            "1 xícara de quinoa cozida",
            "1 xícara de grão de bico cozido",
            "1/2 pepino em cubos",
            "1/2 tomate em cubos",
            "1/4 de pimentão vermelho picado",
            "Suco de 1 limão",
            "Azeite de oliva a gosto",
            "Salsinha picada a gosto",
            "Sal e pimenta a gosto",
        ],
        instructions=(
            "Misture todos os ingredientes em uma tigela. Tempere com suco de limão, azeite, "
            "sal, pimenta e salsinha. Sirva fria."
        ),
        source_url="https://www.example.com/salada-quinoa-grao-de-bico",
        nutritional_information="Calorias: 280, Proteínas: 12g, Carboidratos: 40g",
    ),
    Recipe(
        id="mousse-chocolate-vegano",
        title="Mousse de Chocolate Vegano",
        ingredients=[
            "1 abacate maduro",
            "1/4 xícara de cacau em pó",
            "1/4 xícara de leite de coco",
            "2 colheres de sopa de xarope de bordo",
            "1 colher de chá de extrato de baunilha",
        ],
        instructions=(
            "Bata todos os ingredientes no liquidificador até obter uma consistência cremosa. "
            "Leve à geladeira por pelo menos 30 minutos antes de servir."
        ),
        source_url="https://www.example.com/mousse-chocolate-vegano",
        nutritional_information="Calorias: 250, Proteínas: 4g, Carboidratos: 25g",
    ),
    Recipe(
        id="smoothie-frutas-vermelhas",
        title="Smoothie de Frutas Vermelhas sem Lactose",
        ingredients=[
            "1 xícara de frutas vermelhas congeladas (morango, framboesa, amora)",
            "1/2 banana",
            "1/2 xícara de leite de amêndoas",
            "1 colher de sopa de sementes de chia",
        ],
        instructions="Bata todos os ingredientes no liquidificador até ficar homogêneo. Sirva imediatamente.",
        source_url="https://www.example.com/smoothie-frutas-vermelhas",
        nutritional_information="Calorias: 180, Proteínas: 3g, Carboidratos: 30g",
    ),
]


def classify_dish_type(title: str) -> DishType:
    """Classify a recipe as sweet or savory from its title alone.

    Any title mentioning one of ``SWEET_KEYWORDS`` is sweet, so a
    "Smoothie Salgado" would still be reported as ``doce``.
    """
    lower = title.lower()
    if any(keyword in lower for keyword in SWEET_KEYWORDS):
        return DishType.doce
    return DishType.salgado


def search_recipes(
    restrictions: Iterable[DietaryRestriction],
    dish_type: DishType | None = None,
) -> list[Recipe]:
    """
    Return the fixed recipe catalog, optionally narrowed to one dish type.

    Restrictions are accepted for interface compatibility but do not filter
    the catalog.
    """
    recipes = [r.model_copy(deep=True) for r in _CATALOG]
    if dish_type is None:
        return recipes
    return [r for r in recipes if classify_dish_type(r.title) is dish_type]
