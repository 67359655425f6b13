#!/usr/bin/env python3
"""
Exception types raised by the shipi18n client.

Every error carries an error_type and an optional suggestion so the CLI can
print the same JSON error envelope for all of them.
"""

from typing import Any, Optional


class Shipi18nError(Exception):
    """Base class for all shipi18n errors."""

    error_type = "SHIPI18N_ERROR"

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result = {
            "status": "error",
            "error_type": self.error_type,
            "error": self.message,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class MalformedDocumentError(Shipi18nError):
    """Source document is not valid JSON or its root is not an object."""

    error_type = "MALFORMED_DOCUMENT"


class InputFileError(Shipi18nError):
    """Source file is missing or unreadable."""

    error_type = "INPUT_FILE_ERROR"


class MissingAPIKeyError(Shipi18nError):
    """No API key was configured before a remote call."""

    error_type = "MISSING_API_KEY"

    def __init__(self, message: str = "API key is required. Set SHIPI18N_API_KEY or run: shipi18n config set apiKey YOUR_KEY"):
        super().__init__(
            message,
            suggestion="Get your free API key at https://shipi18n.com or run: shipi18n config set apiKey YOUR_KEY",
        )


class APIError(Shipi18nError):
    """
    Non-success response from the translation service.

    Attributes:
        code: Machine-readable error code from the response body (if any)
        status: HTTP status code (None for network failures)
    """

    error_type = "API_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message, suggestion=suggestion)
        self.code = code
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.code:
            result["code"] = self.code
        if self.status is not None:
            result["http_status"] = self.status
        return result


class ConfigError(Shipi18nError):
    """Unknown configuration key or config file I/O failure."""

    error_type = "CONFIG_ERROR"
