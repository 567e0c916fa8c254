"""HTTP Error Handlers: map exceptions on the REST endpoints to the error envelope.

Invariants:
    - ChatbotError → its own http_status and to_response() body
    - Any other exception → 500 with the same envelope, code INTERNAL_ERROR,
      and no exception text in the body
    - The chat WebSocket never reaches these handlers; it emits its own frames
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chatbot.core.errors import ChatbotError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def internal_error() -> ChatbotError:
    return ChatbotError(
        "Internal server error",
        "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, None, 500,
    )


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(ChatbotError)
    async def chatbot_error_handler(request: Request, exc: ChatbotError):
        logger.warning(
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "session_id": exc.context.session_id},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True, extra={"error_code": "INTERNAL_ERROR"},
        )
        error = internal_error()
        return JSONResponse(status_code=error.http_status, content=error.to_response())
