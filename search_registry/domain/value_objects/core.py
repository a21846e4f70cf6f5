"""Where an entity keeps its ad-hoc key/value pairs for indexing.

The configuration option is polymorphic (a boolean flag or a mapping naming
the attribute); it is parsed once into one of three variants.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from search_registry.core.constants import DEFAULT_OPTIONAL_ATTRIBUTES_FIELD
from search_registry.domain.exceptions import ConfigurationException


@dataclass(frozen=True)
class NoOptionalAttributes:
    """The type declares no optional attributes."""

    @property
    def field(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class DefaultField:
    """Optional attributes live in the default entity attribute."""

    @property
    def field(self) -> str:
        return DEFAULT_OPTIONAL_ATTRIBUTES_FIELD


@dataclass(frozen=True)
class NamedField:
    """Optional attributes live in an explicitly named entity attribute."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Optional attributes field name cannot be empty")

    @property
    def field(self) -> str:
        return self.name


OptionalAttributesSource = NoOptionalAttributes | DefaultField | NamedField


def parse_optional_attributes(
    value: Any, type_name: str | None = None
) -> OptionalAttributesSource:
    """Parse the raw optional_attributes option into its variant.

    true -> DefaultField; false, None or an empty mapping -> NoOptionalAttributes;
    {"field": name} -> NamedField(name).

    Raises:
        ConfigurationException: Mapping without a usable "field", or any other value type.
    """
    if isinstance(value, (NoOptionalAttributes, DefaultField, NamedField)):
        return value
    if value is None or value is False:
        return NoOptionalAttributes()
    if value is True:
        return DefaultField()
    if isinstance(value, Mapping):
        if not value:
            return NoOptionalAttributes()
        field = value.get("field")
        if not isinstance(field, str) or not field.strip():
            raise ConfigurationException(
                "Parameter 'optional_attributes' must name a 'field' when given as a mapping",
                type_name=type_name,
                option="optional_attributes",
            )
        return NamedField(field)
    raise ConfigurationException(
        f"Parameter 'optional_attributes' must be a boolean or a mapping, got {type(value).__name__}",
        type_name=type_name,
        option="optional_attributes",
    )
