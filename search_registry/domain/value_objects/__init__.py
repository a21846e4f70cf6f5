"""Value objects: immutable domain primitives."""

from search_registry.domain.value_objects.core import (
    DefaultField,
    NamedField,
    NoOptionalAttributes,
    OptionalAttributesSource,
    parse_optional_attributes,
)

__all__ = [
    "DefaultField",
    "NamedField",
    "NoOptionalAttributes",
    "OptionalAttributesSource",
    "parse_optional_attributes",
]
