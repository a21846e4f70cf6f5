"""Per-type indexing configuration: raw options and the resolved registry entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from search_registry.domain.value_objects import OptionalAttributesSource

if TYPE_CHECKING:
    from search_registry.application.interfaces.repositories import (
        ISearchableRepository,
    )


class TypeOptions(BaseModel):
    """Options accepted for one entity type in the configuration map.

    Accepts 'fields' in input (stored as indexed_fields). private_key and
    eager_load fall back to settings when omitted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    indexed_fields: list[str] = Field(default_factory=list, alias="fields")
    optional_attributes: bool | dict[str, Any] | None = None
    private_key: str | None = Field(default=None, min_length=1)
    eager_load: list[str] | None = None


@dataclass(frozen=True)
class TypeConfig:
    """Registry entry for one searchable entity type (immutable after registration)."""

    type_name: str
    type_id: str
    fields: tuple[str, ...]
    optional_attributes: OptionalAttributesSource
    private_key_field: str
    repository: ISearchableRepository
    eager_load: tuple[str, ...] = ()
