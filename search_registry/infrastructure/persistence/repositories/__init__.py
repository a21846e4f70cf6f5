"""Searchable repositories and the repository factory (SQLAlchemy)."""

from search_registry.infrastructure.persistence.repositories.base import (
    SearchableRepository,
)
from search_registry.infrastructure.persistence.repositories.factory import (
    ModelRepositoryFactory,
)

__all__ = ["ModelRepositoryFactory", "SearchableRepository"]
