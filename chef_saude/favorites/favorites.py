from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import TypeAdapter, ValidationError

from ..recipes.models import Recipe
from .config import DEFAULT_FAVORITES_CONFIG
from .storage import FavoritesStorage

logger = logging.getLogger(__name__)

_favorites_adapter = TypeAdapter(list[Recipe])


def dump_favorites(favorites: list[Recipe]) -> str:
    return _favorites_adapter.dump_json(favorites, by_alias=True).decode("utf-8")


def load_favorites(raw: str | None) -> list[Recipe]:
    """Parse a stored favorites slot. An unreadable slot counts as empty."""
    if not raw:
        return []
    try:
        return _favorites_adapter.validate_json(raw)
    except ValidationError:
        logger.warning("Discarding unreadable favorites slot", exc_info=True)
        return []


def is_favorite(favorites: list[Recipe], recipe: Recipe) -> bool:
    return any(f.id == recipe.id for f in favorites)


def toggle_favorite(favorites: list[Recipe], recipe: Recipe) -> list[Recipe]:
    """Remove ``recipe`` if it is a favorite, else append it. Returns a new list."""
    if is_favorite(favorites, recipe):
        return [f for f in favorites if f.id != recipe.id]
    return [*favorites, recipe]


def read_favorites(
    storage: FavoritesStorage,
    session_id: str,
    key: str = DEFAULT_FAVORITES_CONFIG.storage_key,
) -> list[Recipe]:
    return load_favorites(storage.get_item(session_id, key))


def write_favorites(
    storage: FavoritesStorage,
    session_id: str,
    favorites: list[Recipe],
    key: str = DEFAULT_FAVORITES_CONFIG.storage_key,
) -> None:
    storage.set_item(session_id, key, dump_favorites(favorites))


def update_favorites(
    storage: FavoritesStorage,
    session_id: str,
    fn: Callable[[list[Recipe]], list[Recipe]],
    key: str = DEFAULT_FAVORITES_CONFIG.storage_key,
) -> list[Recipe]:
    """Apply ``fn`` to a session's favorites as one locked read-modify-write."""
    raw = storage.update(session_id, key, lambda current: dump_favorites(fn(load_favorites(current))))
    return load_favorites(raw)
