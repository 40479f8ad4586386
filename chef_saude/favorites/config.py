from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _storage_path_from_env() -> Path | None:
    raw = os.getenv("FAVORITES_PATH", "")
    return Path(raw) if raw else None


@dataclass(frozen=True)
class FavoritesConfig:
    """
    Where favorites live.

    ``storage_path`` is a JSON file read once at startup and rewritten on
    every change; ``None`` keeps favorites in memory only.
    """

    storage_path: Path | None = field(default_factory=_storage_path_from_env)
    storage_key: str = "favorites"


DEFAULT_FAVORITES_CONFIG = FavoritesConfig()
