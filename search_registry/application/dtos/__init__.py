"""Application DTOs (no ORM dependency)."""

from search_registry.application.dtos.search import ResolvedHits, SearchHit, Window
from search_registry.application.dtos.type_config import TypeConfig, TypeOptions

__all__ = [
    "ResolvedHits",
    "SearchHit",
    "TypeConfig",
    "TypeOptions",
    "Window",
]
