"""Repository factory: resolves configured type names to mapped models.

Type ids are a SHA-256 of the model's module-qualified class name, so they
stay stable across restarts and can be stored in the index.
"""

import hashlib
import importlib
import logging
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from search_registry.domain.exceptions import ConfigurationException
from search_registry.infrastructure.persistence.database import Base
from search_registry.infrastructure.persistence.repositories.base import (
    SearchableRepository,
)

logger = logging.getLogger(__name__)


def qualified_name(cls: type) -> str:
    """Return module.QualName for a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class ModelRepositoryFactory:
    """Creates SearchableRepository handles and type ids for mapped models."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        base: type[DeclarativeBase] = Base,
    ) -> None:
        self.session_factory = session_factory
        self.base = base

    def resolve_model(self, type_name: str) -> type:
        """Return the mapped class for type_name.

        Matches mapped classes of the declarative registry by class name or by
        module-qualified name, then falls back to importing a dotted path.

        Raises:
            ConfigurationException: Name is unknown, ambiguous, or not a mapped class.
        """
        matches = [
            mapper.class_
            for mapper in self.base.registry.mappers
            if type_name in (mapper.class_.__name__, qualified_name(mapper.class_))
        ]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise ConfigurationException(
                f"Type name '{type_name}' is ambiguous; use the module-qualified name",
                type_name=type_name,
                candidates=sorted(qualified_name(cls) for cls in matches),
            )
        return self._import_model(type_name)

    @staticmethod
    def _import_model(type_name: str) -> type:
        module_name, _, attr = type_name.rpartition(".")
        if not module_name:
            raise ConfigurationException(
                f"Unknown searchable type '{type_name}'", type_name=type_name
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationException(
                f"Cannot import module for searchable type '{type_name}'",
                type_name=type_name,
            ) from e
        cls = getattr(module, attr, None)
        if not isinstance(cls, type) or sa_inspect(cls, raiseerr=False) is None:
            raise ConfigurationException(
                f"'{type_name}' is not a mapped model class", type_name=type_name
            )
        return cls

    def new_instance(self, type_name: str) -> SearchableRepository:
        """Return a repository for the named model type."""
        model = self.resolve_model(type_name)
        logger.debug("Creating repository for %s", qualified_name(model))
        return SearchableRepository(self.session_factory, model)

    def type_id(self, type_or_instance: Any) -> str:
        """Return the stable type id for a type name, model class, or instance."""
        if isinstance(type_or_instance, str):
            cls = self.resolve_model(type_or_instance)
        elif isinstance(type_or_instance, type):
            cls = type_or_instance
        else:
            cls = type(type_or_instance)
        return hashlib.sha256(qualified_name(cls).encode()).hexdigest()
