"""Error Hierarchy: typed, categorized exceptions for all chatbot failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only ProtocolError subclasses ever reach the WebSocket as an error frame
    - to_frame() produces the WebSocket envelope; to_response() the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ChatbotError base: FastAPI global handler catches all
    - Infrastructure errors (backend, model) are raised by the clients and absorbed
      by the service that made the call; they are never turned into error frames
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    PROTOCOL = "protocol"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    project_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ChatbotError(Exception):
    """Base exception for all chatbot errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_id": self.context.session_id,
                    "project_id": self.context.project_id,
                },
            }
        }

    def to_frame(self) -> dict:
        """Convert to the WebSocket error frame."""
        return {"error": self.message}


# ─── Protocol Errors (surfaced to the client) ───────────────────

class ProtocolError(ChatbotError):
    """Inbound frame cannot be processed. Surfaced as an error frame."""


class InvalidFrameError(ProtocolError):
    """Inbound payload is not a well-formed frame."""
    def __init__(self, reason: str = "", context: ErrorContext | None = None):
        super().__init__(
            "Invalid message format",
            "INVALID_FRAME", ErrorCategory.PROTOCOL,
            ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


class SessionNotFoundError(ProtocolError):
    """Frame or request addressed to a session the store does not hold."""
    def __init__(self, session_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.session_id = session_id
        super().__init__(
            "Session not found",
            "SESSION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (absorbed by services) ────────────────

class BackendAPIError(ChatbotError):
    """Deliberation backend call failed (transport, non-2xx, malformed body)."""
    def __init__(
        self,
        message: str,
        operation: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Backend {operation} failed: {message}",
            "BACKEND_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.operation = operation
        self.status_code = status_code


class ModelAPIError(ChatbotError):
    """Generative model call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Model API error ({api_error_type}): {message}",
            "MODEL_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 503,
        )
        self.api_error_type = api_error_type


class ConfigurationError(ChatbotError):
    """Required setting missing at startup."""
    def __init__(self, missing: list[str]):
        super().__init__(
            f"Missing required settings: {', '.join(missing)}",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.missing = missing
