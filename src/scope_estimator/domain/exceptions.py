"""
Scope Estimator - Domain Exceptions

Custom exception hierarchy for structured error handling.
"""
from typing import Any


class EstimatorException(Exception):
    """Base exception for all Scope Estimator errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidInputError(EstimatorException):
    """Malformed edit request (e.g., non-positive hours, empty feature name)."""

    def __init__(self, message: str, field_name: str | None = None, value: Any = None, **kwargs):
        super().__init__(message, {"field_name": field_name, "value": value, **kwargs})
        self.field_name = field_name
        self.value = value


class OutOfRangeError(EstimatorException):
    """Index-based operation addressed a position outside the breakdown."""

    def __init__(self, message: str, index: int | None = None, length: int | None = None, **kwargs):
        super().__init__(message, {"index": index, "length": length, **kwargs})
        self.index = index
        self.length = length


class ConfigurationError(EstimatorException):
    """Configuration error (e.g., corrupted preset table)."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs):
        super().__init__(message, {"config_key": config_key, **kwargs})
        self.config_key = config_key
