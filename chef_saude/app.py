from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .favorites.config import DEFAULT_FAVORITES_CONFIG
from .favorites.favorites import (
    is_favorite,
    read_favorites,
    toggle_favorite,
    update_favorites,
)
from .favorites.storage import FavoritesStorage
from .flows.generation import generate_recipes
from .flows.search import intelligent_recipe_search
from .llm.base import RecipeModel
from .llm.groq_client import GroqRecipeModel
from .recipes.catalog import search_recipes
from .recipes.models import (
    RESTRICTION_INFO,
    CatalogRequest,
    DishType,
    FavoritesResponse,
    Notification,
    Recipe,
    RecipeGenerationRequest,
    RecipeListResponse,
    RecipeSearchRequest,
    RestrictionOut,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Chef Saúde API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "chef-saude-secret-change-in-production"),
)

_STATIC_DIR = Path(__file__).resolve().parent / "static"

NOT_FOUND_NOTIFICATION = Notification(
    title="Nenhuma receita encontrada",
    description="Não foi possível encontrar receitas com as restrições selecionadas.",
)

_favorites_storage = FavoritesStorage(DEFAULT_FAVORITES_CONFIG.storage_path)


# ── Dependencies ─────────────────────────────────────────────────────────


def get_recipe_model() -> RecipeModel:
    return GroqRecipeModel()


def get_favorites_storage() -> FavoritesStorage:
    return _favorites_storage


def get_session_id(request: Request) -> str:
    """Return the browser's session id, creating one on first use."""
    session_id = request.session.get("session_id")
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session["session_id"] = session_id
    return session_id


def _recipe_list(recipes: list[Recipe]) -> RecipeListResponse:
    if not recipes:
        return RecipeListResponse(recipes=[], notification=NOT_FOUND_NOTIFICATION)
    return RecipeListResponse(recipes=recipes)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restrictions")
def restrictions() -> dict:
    return {
        "restrictions": [
            RestrictionOut(value=value, label=label, description=description).model_dump(mode="json")
            for value, (label, description) in RESTRICTION_INFO.items()
        ],
        "dish_types": [d.value for d in DishType],
    }


# ── Recipe endpoints ─────────────────────────────────────────────────────


@app.post("/recipes/generate", response_model=RecipeListResponse)
def recipes_generate(
    body: RecipeGenerationRequest,
    model: RecipeModel = Depends(get_recipe_model),
) -> RecipeListResponse:
    try:
        output = generate_recipes(body, model=model)
    except Exception as exc:
        logger.exception("Recipe generation failed")
        record_event("failure", {"flow": "generation", "error": str(exc)})
        raise HTTPException(status_code=502, detail=f"Erro ao gerar receitas: {exc}") from exc
    return _recipe_list(output.recipes)


@app.post("/recipes/search", response_model=RecipeListResponse)
def recipes_search(
    body: RecipeSearchRequest,
    request: Request,
    model: RecipeModel = Depends(get_recipe_model),
) -> RecipeListResponse:
    previous_titles = request.session.get("previous_titles", [])
    try:
        outcome = intelligent_recipe_search(body, previous_titles, model=model)
    except Exception as exc:
        logger.exception("Recipe search failed")
        record_event("failure", {"flow": "search", "error": str(exc)})
        raise HTTPException(status_code=502, detail=f"Erro ao buscar receitas: {exc}") from exc

    request.session["previous_titles"] = list(outcome.previous_titles)
    return _recipe_list(outcome.output.recipes)


@app.post("/recipes/catalog", response_model=RecipeListResponse)
def recipes_catalog(body: CatalogRequest) -> RecipeListResponse:
    return _recipe_list(search_recipes(body.restrictions, body.dish_type))


# ── Favorites ────────────────────────────────────────────────────────────


@app.get("/favorites", response_model=FavoritesResponse)
def favorites_list(
    session_id: str = Depends(get_session_id),
    storage: FavoritesStorage = Depends(get_favorites_storage),
) -> FavoritesResponse:
    return FavoritesResponse(favorites=read_favorites(storage, session_id))


@app.post("/favorites/toggle", response_model=FavoritesResponse)
def favorites_toggle(
    recipe: Recipe,
    session_id: str = Depends(get_session_id),
    storage: FavoritesStorage = Depends(get_favorites_storage),
) -> FavoritesResponse:
    favorites = update_favorites(storage, session_id, lambda current: toggle_favorite(current, recipe))
    return FavoritesResponse(favorites=favorites, is_favorite=is_favorite(favorites, recipe))


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


# ── Static ───────────────────────────────────────────────────────────────


app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")


@app.get("/")
def root():
    return FileResponse(str(_STATIC_DIR / "index.html"))
