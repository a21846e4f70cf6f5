"""Application services: type registry."""

from search_registry.application.services.type_registry import TypeRegistry

__all__ = ["TypeRegistry"]
