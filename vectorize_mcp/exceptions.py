"""Application exception hierarchy.

All custom exceptions inherit from VectorizeToolsError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "VTX-1000"
    CONFIGURATION_ERROR = "VTX-1001"
    VALIDATION_ERROR = "VTX-1002"

    # Tool dispatch errors (2xxx)
    TOOL_NOT_FOUND = "VTX-2000"

    # Vectorize API errors (3xxx)
    API_ERROR = "VTX-3000"
    API_TIMEOUT = "VTX-3001"
    API_RATE_LIMIT = "VTX-3002"
    API_AUTH_ERROR = "VTX-3003"
    API_CONNECTION_ERROR = "VTX-3004"
    API_INVALID_RESPONSE = "VTX-3005"


class VectorizeToolsError(Exception):
    """Base exception for all Vectorize tools errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(VectorizeToolsError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(VectorizeToolsError):
    """Tool argument validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class ToolNotFoundError(VectorizeToolsError):
    """Requested tool is not registered."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.TOOL_NOT_FOUND, details)


class VectorizeAPIError(VectorizeToolsError):
    """Vectorize API request error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.API_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
