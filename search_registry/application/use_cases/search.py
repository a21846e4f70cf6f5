"""Hit resolution use case: turn index hits back into live entities.

Hits are grouped by type and fetched with one batch query per type, so a
results page never costs one query per hit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from search_registry.application.dtos.search import ResolvedHits, SearchHit, Window
from search_registry.core.config import get_settings
from search_registry.shared.telemetry import add_span_attributes, add_span_event, traced

if TYPE_CHECKING:
    from search_registry.application.dtos.type_config import TypeConfig
    from search_registry.application.services.type_registry import TypeRegistry

logger = logging.getLogger(__name__)


def group_keys_by_type(hits: Sequence[SearchHit]) -> dict[str, list[str]]:
    """Group hit private keys by type id.

    Types appear in first-seen order; keys are de-duplicated per type and keep
    their first-seen order.
    """
    grouped: dict[str, dict[str, None]] = {}
    for hit in hits:
        grouped.setdefault(hit.type_id, {})[hit.private_key] = None
    return {type_id: list(keys) for type_id, keys in grouped.items()}


class HitResolver:
    """Resolves search hits to entities through the type registry."""

    def __init__(
        self,
        registry: "TypeRegistry",
        preserve_hit_order: bool | None = None,
    ) -> None:
        self.registry = registry
        self.preserve_hit_order = (
            get_settings().search_preserve_hit_order
            if preserve_hit_order is None
            else preserve_hit_order
        )

    @traced("search.resolve_one")
    async def resolve_one(self, hit: SearchHit) -> Any | None:
        """Fetch the entity behind one hit.

        Returns None when the key no longer exists in storage (stale index entry).

        Raises:
            TypeConfigNotFoundException: hit.type_id is not registered.
        """
        config = self.registry.config_for_type_id(hit.type_id)
        entity = await config.repository.find_by_key(
            hit.private_key, key_field=config.private_key_field
        )
        if entity is None:
            logger.debug(
                "Stale hit: %s %s=%s not found",
                config.type_name,
                config.private_key_field,
                hit.private_key,
            )
            add_span_event("stale_hit", {"type_id": hit.type_id})
        return entity

    @traced("search.resolve_many")
    async def resolve_many(
        self,
        hits: Sequence[SearchHit],
        offset: int | None = None,
        limit: int | None = None,
    ) -> ResolvedHits:
        """Fetch the entities for a hit list, optionally one window of it.

        The window applies only when both offset and limit are given; otherwise
        every hit is resolved. total_count is always len(hits).

        Raises:
            TypeConfigNotFoundException: Any hit's type id is not registered
                (raised before any fetch).
            ValidationException: Negative offset or limit.
        """
        total_count = len(hits)
        if offset is not None and limit is not None:
            page = Window(offset=offset, limit=limit).apply(hits)
        else:
            page = list(hits)

        grouped = group_keys_by_type(page)
        configs = {
            type_id: self.registry.config_for_type_id(type_id) for type_id in grouped
        }

        fetched: dict[str, list[Any]] = {}
        for type_id, keys in grouped.items():
            config = configs[type_id]
            fetched[type_id] = await config.repository.find_by_keys(
                keys,
                key_field=config.private_key_field,
                eager_load=config.eager_load,
            )

        if self.preserve_hit_order:
            entities, stale_hits = self._order_by_hits(page, configs, fetched)
        else:
            entities = [entity for batch in fetched.values() for entity in batch]
            stale_hits = []

        add_span_attributes(
            hit_count=total_count,
            page_hit_count=len(page),
            type_count=len(grouped),
            entity_count=len(entities),
            stale_count=len(stale_hits),
        )
        if stale_hits:
            logger.debug("%d stale hit(s) dropped from results", len(stale_hits))
        return ResolvedHits(
            entities=entities, total_count=total_count, stale_hits=stale_hits
        )

    @staticmethod
    def _order_by_hits(
        hits: Sequence[SearchHit],
        configs: dict[str, "TypeConfig"],
        fetched: dict[str, list[Any]],
    ) -> tuple[list[Any], list[SearchHit]]:
        """Put batch-fetched entities back into hit order; collect hits with no entity.

        Entity keys and hit keys are both normalized by the type's repository,
        so a serialized key like "05" still matches the record stored as 5.
        """
        by_key: dict[tuple[str, Any], Any] = {}
        for type_id, batch in fetched.items():
            config = configs[type_id]
            for entity in batch:
                key = config.repository.normalize_key(
                    getattr(entity, config.private_key_field),
                    key_field=config.private_key_field,
                )
                by_key[(type_id, key)] = entity

        entities: list[Any] = []
        stale_hits: list[SearchHit] = []
        seen: set[tuple[str, Any]] = set()
        for hit in hits:
            config = configs[hit.type_id]
            normalized = config.repository.normalize_key(
                hit.private_key, key_field=config.private_key_field
            )
            if normalized is None:
                stale_hits.append(hit)
                continue
            key = (hit.type_id, normalized)
            if key in seen:
                continue
            seen.add(key)
            entity = by_key.get(key)
            if entity is None:
                stale_hits.append(hit)
            else:
                entities.append(entity)
        return entities, stale_hits
