"""Composition root: builds the type registry and hit resolver.

No business logic here, only wiring of settings and infrastructure. Call
once at startup and share the results; both objects are read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from search_registry.application.services.type_registry import TypeRegistry
from search_registry.application.use_cases.search import HitResolver
from search_registry.core.config import get_settings

if TYPE_CHECKING:
    from search_registry.application.dtos.type_config import TypeOptions
    from search_registry.application.interfaces.repositories import IRepositoryFactory


def build_type_registry(
    configuration: Mapping[str, Mapping[str, Any] | TypeOptions] | None = None,
    repository_factory: IRepositoryFactory | None = None,
) -> TypeRegistry:
    """Build the registry from configuration (default: settings.search_types).

    Without a repository_factory, a ModelRepositoryFactory over the lazy
    session factory is used (requires DATABASE_URL).
    """
    settings = get_settings()
    if configuration is None:
        configuration = settings.search_types
    if repository_factory is None:
        from search_registry.infrastructure.persistence.database import (
            get_session_factory,
        )
        from search_registry.infrastructure.persistence.repositories import (
            ModelRepositoryFactory,
        )

        repository_factory = ModelRepositoryFactory(get_session_factory())
    return TypeRegistry(configuration, repository_factory)


def build_hit_resolver(registry: TypeRegistry | None = None) -> HitResolver:
    """Build a HitResolver over registry (default: build_type_registry())."""
    return HitResolver(registry if registry is not None else build_type_registry())
