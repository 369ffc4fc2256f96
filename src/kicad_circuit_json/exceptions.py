"""Exception hierarchy for the converter.

Stages never raise: recoverable anomalies become warnings. These exceptions
cover the outer edges only (loading files, validating requests, an absent
input tree).
"""

from __future__ import annotations

from typing import Any


class KicadCircuitError(Exception):
    """Base exception for all converter errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class ValidationError(KicadCircuitError):
    """Raised when a request or configuration value is invalid."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        super().__init__(message, "VALIDATION_ERROR", field=field, **kwargs)


class InputLoadingError(KicadCircuitError):
    """Raised when a KiCad file cannot be read or parsed."""

    error_code = "INPUT_LOADING_ERROR"

    def __init__(self, message: str, path: str | None = None, **kwargs: Any):
        super().__init__(message, "INPUT_LOADING_ERROR", path=path, **kwargs)


class UnsupportedDocumentError(KicadCircuitError):
    """Raised when a document root is neither a board nor a schematic."""

    error_code = "UNSUPPORTED_DOCUMENT"

    def __init__(self, message: str, root_name: str | None = None, **kwargs: Any):
        super().__init__(message, "UNSUPPORTED_DOCUMENT", root_name=root_name, **kwargs)


class ConversionError(KicadCircuitError):
    """Raised when a conversion run has no input tree at all."""

    error_code = "CONVERSION_ERROR"

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, "CONVERSION_ERROR", **kwargs)


__all__ = [
    "ConversionError",
    "InputLoadingError",
    "KicadCircuitError",
    "UnsupportedDocumentError",
    "ValidationError",
]
