"""Repository interfaces (ports) consumed by the type registry and hit resolver.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class ISearchableRepository(Protocol):
    """Protocol for a per-type storage facade (stateless, safe to share)."""

    async def find_by_key(self, key: Any, *, key_field: str = "id") -> Any | None:
        """Return the entity whose key_field equals key, or None."""

    async def find_by_keys(
        self,
        keys: Sequence[Any],
        *,
        key_field: str = "id",
        eager_load: Sequence[str] = (),
    ) -> list[Any]:
        """Return all entities whose key_field is in keys (one batch query)."""

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Any]:
        """Return entities with pagination (for index builders)."""

    def normalize_key(self, key: Any, *, key_field: str = "id") -> Any | None:
        """Return key in the stored key's canonical form, or None if nothing can match."""

    def check_key_field(self, key_field: str) -> None:
        """Raise ConfigurationException if entities have no key_field to look up by."""


class IRepositoryFactory(Protocol):
    """Protocol for resolving entity type names to repositories and type ids."""

    def new_instance(self, type_name: str) -> ISearchableRepository:
        """Return a repository handle for the named entity type."""

    def type_id(self, type_or_instance: Any) -> str:
        """Return the stable type id of a type name, class, or entity instance."""
