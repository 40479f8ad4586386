from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMPTY_RESTRICTIONS_MESSAGE = "Selecione pelo menos uma restrição alimentar."


class DietaryRestriction(str, Enum):
    celiac_disease = "Doença Celíaca"
    lactose_intolerance = "Intolerância à Lactose"
    food_allergy = "Alergia Alimentar"
    diabetes = "Diabetes Mellitus"
    chronic_kidney_disease = "Doença Renal Crônica"
    phenylketonuria = "Fenilcetonúria"
    irritable_bowel_syndrome = "Síndrome do Intestino Irritável"
    inflammatory_bowel_disease = "Doença Inflamatória Intestinal"
    dyslipidemia = "Dislipidemia"
    gout = "Gota"
    vegan = "Vegano"
    vegetarian = "Vegetariano"
    ovolacto = "Ovolacto"


class DishType(str, Enum):
    doce = "doce"
    salgado = "salgado"


# Checklist shown on the page: value -> (label, description)
RESTRICTION_INFO: dict[DietaryRestriction, tuple[str, str]] = {
    DietaryRestriction.celiac_disease: (
        "Doença Celíaca",
        "Restrição: Glúten (presente em trigo, centeio e cevada)",
    ),
    DietaryRestriction.lactose_intolerance: (
        "Intolerância à Lactose",
        "Restrição: Lactose (açúcar do leite)",
    ),
    DietaryRestriction.food_allergy: (
        "Alergia Alimentar",
        "Restrição: O alimento específico que causa a reação alérgica",
    ),
    DietaryRestriction.diabetes: (
        "Diabetes Mellitus",
        "Restrição: Açúcares simples e carboidratos refinados",
    ),
    DietaryRestriction.chronic_kidney_disease: (
        "Doença Renal Crônica",
        "Restrição: Sódio, potássio, fósforo e, às vezes, proteína",
    ),
    DietaryRestriction.phenylketonuria: (
        "Fenilcetonúria (PKU)",
        "Restrição: Fenilalanina (presente em proteínas e adoçantes como aspartame)",
    ),
    DietaryRestriction.irritable_bowel_syndrome: (
        "Síndrome do Intestino Irritável (FODMAP)",
        "Restrição: Alimentos ricos em FODMAPs (carboidratos fermentáveis)",
    ),
    DietaryRestriction.inflammatory_bowel_disease: (
        "Doença Inflamatória Intestinal (Crohn e Retocolite Ulcerativa)",
        "Restrição: Alimentos que irritam o intestino (varia por pessoa)",
    ),
    DietaryRestriction.dyslipidemia: (
        "Dislipidemia (colesterol ou triglicerídes altos)",
        "Restrição: Gorduras saturadas, trans e excesso de carboidratos simples",
    ),
    DietaryRestriction.gout: (
        "Gota (hiperuricemia)",
        "Restrição: Alimentos ricos em purinas (carnes vermelhas, frutos do mar, bebidas alcoólicas)",
    ),
    DietaryRestriction.vegan: (
        "Vegano",
        "Restrição: Qualquer ingrediente de origem animal",
    ),
    DietaryRestriction.vegetarian: (
        "Vegetariano",
        "Restrição: Carnes e peixes",
    ),
    DietaryRestriction.ovolacto: (
        "Ovolacto",
        "Restrição: Carnes e peixes (ovos e laticínios permitidos)",
    ),
}

# The search flow only knows the newer restriction set.
SEARCH_RESTRICTIONS: frozenset[DietaryRestriction] = frozenset(
    r for r in DietaryRestriction if r is not DietaryRestriction.inflammatory_bowel_disease
)


def _new_recipe_id() -> str:
    return uuid.uuid4().hex


class Recipe(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_recipe_id, min_length=1)
    title: str = Field(..., min_length=1)
    ingredients: list[str]
    instructions: str
    source_url: str = Field(..., alias="sourceUrl")
    nutritional_information: str | None = Field(default=None, alias="nutritionalInformation")


class RecipeListOutput(BaseModel):
    """Structured output every recipe prompt must produce."""

    recipes: list[Recipe] = Field(default_factory=list)

    def titles(self) -> list[str]:
        return [r.title for r in self.recipes]


def _require_restrictions(value: list[DietaryRestriction]) -> list[DietaryRestriction]:
    if not value:
        raise ValueError(EMPTY_RESTRICTIONS_MESSAGE)
    return value


class RecipeGenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restrictions: list[DietaryRestriction]
    ingredients: str | None = Field(
        default=None, description="Comma separated ingredients to include"
    )
    dish_type: DishType | None = Field(default=None, alias="dishType")

    @field_validator("restrictions")
    @classmethod
    def check_restrictions(cls, value: list[DietaryRestriction]) -> list[DietaryRestriction]:
        return _require_restrictions(value)


class RecipeSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restrictions: list[DietaryRestriction]
    recipe_name: str | None = Field(default=None, alias="recipeName")
    dish_type: DishType | None = Field(default=None, alias="dishType")

    @field_validator("restrictions")
    @classmethod
    def check_restrictions(cls, value: list[DietaryRestriction]) -> list[DietaryRestriction]:
        _require_restrictions(value)
        unsupported = [r.value for r in value if r not in SEARCH_RESTRICTIONS]
        if unsupported:
            raise ValueError(f"Restrição não suportada na busca: {', '.join(unsupported)}")
        return value


class CatalogRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restrictions: list[DietaryRestriction] = Field(default_factory=list)
    dish_type: DishType | None = Field(default=None, alias="dishType")


class Notification(BaseModel):
    title: str
    description: str


class RecipeListResponse(BaseModel):
    recipes: list[Recipe]
    notification: Notification | None = None


class FavoritesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorites: list[Recipe]
    is_favorite: bool | None = Field(default=None, alias="isFavorite")


class RestrictionOut(BaseModel):
    value: DietaryRestriction
    label: str
    description: str
