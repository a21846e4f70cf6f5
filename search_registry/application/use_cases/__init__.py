"""Application use cases: resolving search hits into entities."""

from search_registry.application.use_cases.search import HitResolver, group_keys_by_type

__all__ = ["HitResolver", "group_keys_by_type"]
