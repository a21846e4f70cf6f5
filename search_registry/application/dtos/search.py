"""DTOs for resolving search-index hits into entities."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from search_registry.core.constants import PRIVATE_KEY_FIELD, TYPE_ID_FIELD
from search_registry.domain.exceptions import ValidationException

T = TypeVar("T")


@dataclass(frozen=True)
class SearchHit:
    """Single index hit: which type produced it and the entity's private key."""

    type_id: str
    private_key: str
    score: float | None = None

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], score: float | None = None
    ) -> "SearchHit":
        """Build a hit from the stored fields of an index document.

        Raises:
            ValidationException: Document lacks the type id or private key field.
        """
        for name in (TYPE_ID_FIELD, PRIVATE_KEY_FIELD):
            if document.get(name) is None:
                raise ValidationException(
                    f"Index document has no '{name}' field", field=name
                )
        return cls(
            type_id=str(document[TYPE_ID_FIELD]),
            private_key=str(document[PRIVATE_KEY_FIELD]),
            score=score,
        )


@dataclass(frozen=True)
class Window:
    """Offset/limit pair selecting one page of hits."""

    offset: int
    limit: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationException("Window offset must be >= 0", field="offset")
        if self.limit < 0:
            raise ValidationException("Window limit must be >= 0", field="limit")

    def apply(self, items: Sequence[T]) -> list[T]:
        """Return items[offset:offset + limit] (empty when offset is out of range)."""
        return list(items[self.offset : self.offset + self.limit])


@dataclass
class ResolvedHits:
    """Entities fetched for a hit list, plus the unwindowed hit count.

    stale_hits lists hits whose key no longer resolves to a live entity.
    """

    entities: list[Any]
    total_count: int
    stale_hits: list[SearchHit] = field(default_factory=list)
