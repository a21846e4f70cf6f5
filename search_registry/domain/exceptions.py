"""Domain exceptions for the search registry.

Configuration errors are fatal at startup; lookup errors signal that the
index and the registry are out of sync. Stale index entries (a key that no
longer resolves to a live entity) are not errors and have no exception here.
"""

from typing import Any


class SearchRegistryException(Exception):
    """Base exception for all search registry errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. type_name, type_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationException(SearchRegistryException):
    """Raised while building the registry from an invalid configuration map."""

    def __init__(
        self,
        message: str,
        type_name: str | None = None,
        **details_extra: Any,
    ) -> None:
        """Initialize with message and the offending type name.

        Args:
            message: Description of the configuration problem.
            type_name: Optional entity type name the problem belongs to.
            **details_extra: Optional keys merged into details (e.g. type_id, option).
        """
        details: dict[str, Any] = {"type_name": type_name} if type_name else {}
        details.update(details_extra)
        super().__init__(message, "CONFIGURATION_ERROR", details)


class TypeConfigNotFoundException(SearchRegistryException):
    """Raised when an entity or hit type id matches no registered type."""

    def __init__(self, type_id: str, type_name: str | None = None) -> None:
        """Initialize with the unmatched type id.

        Args:
            type_id: The type id that has no registry entry.
            type_name: Optional runtime type name (for instance lookups).
        """
        if type_name:
            message = f"Configuration doesn't exist for type '{type_name}'"
        else:
            message = f"Configuration doesn't exist for type id '{type_id}'"
        details: dict[str, Any] = {"type_id": type_id}
        if type_name:
            details["type_name"] = type_name
        super().__init__(message, "TYPE_CONFIG_NOT_FOUND", details)


class ValidationException(SearchRegistryException):
    """Raised when input validation fails (e.g. negative window offset)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SqlNotConfiguredException(SearchRegistryException):
    """Raised when a session factory is requested but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
