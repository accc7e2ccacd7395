"""
Error types for Spaceship-DNS.
"""

from typing import Any, Optional


class SpaceshipError(Exception):
    """Base class for all Spaceship-DNS errors."""


class ConfigError(SpaceshipError):
    """Required configuration is missing or invalid."""


class ValidationError(SpaceshipError):
    """
    A record description cannot be normalized.

    Raised before any network call is made.
    """

    def __init__(
        self, message: str, field: Optional[str] = None, value: Any = None
    ):
        """
        Initialize a ValidationError.

        Args:
            message: Human-readable description of the problem
            field: Name of the offending field, if any
            value: The literal value received for that field
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class TransportError(SpaceshipError):
    """The request could not be delivered to the Spaceship API."""


class APIError(SpaceshipError):
    """
    The Spaceship API answered with a non-success status.
    """

    def __init__(self, status_code: int, reason: str, detail: str = ""):
        """
        Initialize an APIError.

        Args:
            status_code: HTTP status code
            reason: HTTP reason phrase
            detail: Error detail extracted from the response body
        """
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        super().__init__(f"Spaceship API error: {status_code} {reason}. {detail}")
