"""Custom exception hierarchy for the Blockmon engine.

All exceptions inherit from BlockmonError, enabling unified error handling
at the boundary between the engine and the service layer that embeds it.
The engine is purely computational: these errors signal precondition
violations, never transient or retryable conditions.

Example:
    >>> from blockmon.core.exceptions import ValidationError
    >>> raise ValidationError("Fusion requires at least two parents", field_name="parents")
"""

from __future__ import annotations

from typing import Any


class BlockmonError(Exception):
    """Base exception for all Blockmon engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(BlockmonError):
    """Raised when engine configuration is invalid.

    This includes invalid tunables loaded from the environment or
    incompatible combinations of settings.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(BlockmonError):
    """Raised when an engine precondition is violated.

    Fusion with fewer than two parents or with parents of different
    species fails fast with this error, before any output is produced.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the input that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class SeedError(ValidationError):
    """Raised when seed text cannot be parsed as a 64-bit hex value."""


# =============================================================================
# Engine Domain Exceptions
# =============================================================================


class EngineError(BlockmonError):
    """Base exception for generation and simulation errors."""


class CatalogError(EngineError):
    """Raised when a species lookup does not match any catalog entry."""

    def __init__(
        self,
        message: str,
        *,
        species: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with the species key that was requested.

        Args:
            message: Human-readable error description.
            species: The species id or name that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if species:
            combined_details["species"] = species
        super().__init__(message, details=combined_details)


__all__ = [
    "BlockmonError",
    "ConfigurationError",
    "ValidationError",
    "SeedError",
    "EngineError",
    "CatalogError",
]
