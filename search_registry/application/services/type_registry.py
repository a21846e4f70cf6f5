"""Type registry: which entity types are searchable and how they are indexed.

Built once from the configuration map at startup and read-only afterwards,
so a single instance can be shared across concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from search_registry.application.dtos.type_config import TypeConfig, TypeOptions
from search_registry.core.config import get_settings
from search_registry.core.constants import PRIVATE_KEY_FIELD, TYPE_ID_FIELD
from search_registry.domain.exceptions import (
    ConfigurationException,
    TypeConfigNotFoundException,
)
from search_registry.domain.value_objects import parse_optional_attributes

if TYPE_CHECKING:
    from search_registry.application.interfaces.repositories import (
        IRepositoryFactory,
        ISearchableRepository,
    )

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Indexing configuration per entity type, keyed by stable type id."""

    def __init__(
        self,
        configuration: Mapping[str, Mapping[str, Any] | TypeOptions],
        repository_factory: "IRepositoryFactory",
        *,
        default_private_key: str | None = None,
        default_eager_load: list[str] | None = None,
    ) -> None:
        """Validate the configuration map and register every type.

        Args:
            configuration: Entity type name -> options (mapping or TypeOptions).
            repository_factory: Resolves type names to repositories and type ids.
            default_private_key: private_key when a type omits it (settings default).
            default_eager_load: eager_load when a type omits it (settings default).

        Raises:
            ConfigurationException: A type declares nothing to index, has malformed
                options, cannot be resolved, or shares its type id with another type.
        """
        settings = get_settings()
        self.repository_factory = repository_factory
        self._default_private_key = (
            default_private_key or settings.search_default_private_key
        )
        self._default_eager_load = tuple(
            settings.search_eager_load
            if default_eager_load is None
            else default_eager_load
        )
        self._configs: dict[str, TypeConfig] = {}

        for type_name, options in configuration.items():
            config = self._build_config(type_name, options)
            existing = self._configs.get(config.type_id)
            if existing is not None:
                raise ConfigurationException(
                    f"Types '{existing.type_name}' and '{type_name}' share type id '{config.type_id}'",
                    type_name=type_name,
                    type_id=config.type_id,
                )
            self._configs[config.type_id] = config
            logger.debug(
                "Registered searchable type %s (type_id=%s, fields=%d)",
                type_name,
                config.type_id,
                len(config.fields),
            )
        logger.info("Search registry built with %d type(s)", len(self._configs))

    def _build_config(
        self, type_name: str, options: Mapping[str, Any] | TypeOptions
    ) -> TypeConfig:
        parsed = self._parse_options(type_name, options)
        optional_attributes = parse_optional_attributes(
            parsed.optional_attributes, type_name
        )
        if not parsed.indexed_fields and not optional_attributes:
            raise ConfigurationException(
                f"Parameter 'fields' and/or 'optional_attributes' for '{type_name}' type must be specified.",
                type_name=type_name,
            )
        repository = self.repository_factory.new_instance(type_name)
        type_id = self.repository_factory.type_id(type_name)
        private_key_field = parsed.private_key or self._default_private_key
        repository.check_key_field(private_key_field)
        eager_load = (
            self._default_eager_load
            if parsed.eager_load is None
            else tuple(parsed.eager_load)
        )
        return TypeConfig(
            type_name=type_name,
            type_id=type_id,
            fields=tuple(dict.fromkeys(parsed.indexed_fields)),
            optional_attributes=optional_attributes,
            private_key_field=private_key_field,
            repository=repository,
            eager_load=eager_load,
        )

    @staticmethod
    def _parse_options(
        type_name: str, options: Mapping[str, Any] | TypeOptions
    ) -> TypeOptions:
        if isinstance(options, TypeOptions):
            return options
        if not isinstance(options, Mapping):
            raise ConfigurationException(
                f"Options for '{type_name}' type must be a mapping, got {type(options).__name__}",
                type_name=type_name,
            )
        try:
            return TypeOptions.model_validate(dict(options))
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid options for '{type_name}' type",
                type_name=type_name,
                errors=e.errors(include_url=False),
            ) from e

    # --- lookups ---

    def config_for(self, entity: Any) -> TypeConfig:
        """Return the configuration for an entity instance's runtime type.

        Raises:
            TypeConfigNotFoundException: The entity's type is not registered.
        """
        type_id = self.repository_factory.type_id(entity)
        config = self._configs.get(type_id)
        if config is None:
            raise TypeConfigNotFoundException(type_id, type(entity).__name__)
        return config

    def config_for_type_id(self, type_id: str) -> TypeConfig:
        """Return the configuration for a stored type id (e.g. from a search hit).

        Raises:
            TypeConfigNotFoundException: No type registered under type_id.
        """
        config = self._configs.get(type_id)
        if config is None:
            raise TypeConfigNotFoundException(type_id)
        return config

    def repositories(self) -> list["ISearchableRepository"]:
        """Return one repository per registered type, in registration order."""
        return [config.repository for config in self._configs.values()]

    @property
    def type_ids(self) -> list[str]:
        return list(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def __iter__(self) -> Iterator[TypeConfig]:
        return iter(self._configs.values())

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._configs

    # --- index document metadata ---

    def private_key_pair(self, entity: Any) -> tuple[str, Any]:
        """Return ("private_key", value of the entity's private key attribute)."""
        config = self.config_for(entity)
        return PRIVATE_KEY_FIELD, getattr(entity, config.private_key_field)

    def type_id_pair(self, entity: Any) -> tuple[str, str]:
        """Return ("class_uid", the entity's type id)."""
        config = self.config_for(entity)
        return TYPE_ID_FIELD, config.type_id

    def indexable_fields(self, entity: Any) -> tuple[str, ...]:
        """Return the attribute names to index verbatim for the entity's type."""
        return self.config_for(entity).fields

    def optional_attributes(self, entity: Any) -> dict[str, Any]:
        """Return the entity's ad-hoc key/value pairs for indexing.

        Best effort: an absent, None, or non-mapping source attribute yields {}.
        """
        field = self.config_for(entity).optional_attributes.field
        if field is None:
            return {}
        value = getattr(entity, field, None)
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            logger.warning(
                "Optional attributes field %s on %s is %s, not a mapping; skipping",
                field,
                type(entity).__name__,
                type(value).__name__,
            )
            return {}
        return dict(value)
