"""Deliberation Chatbot API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ChatbotError → structured JSON responses
    - Collaborators (SessionStore, model client, backend client) live on app.state,
      created in the lifespan and shared by every connection
    - Missing credentials abort startup (ConfigurationError)

Design Decisions:
    - create_app() factory: tests inject fake collaborators; module-level `app`
      serves `uvicorn chatbot.main:app`
    - Injected collaborators are not closed by the lifespan; owned ones are
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatbot.api.error_handlers import register_error_handlers
from chatbot.api.routes import chat_socket, health, sessions
from chatbot.config import Settings, get_settings
from chatbot.core.boundary_protocols import DeliberationBackend, TextGenerator
from chatbot.core.session_store import SessionStore
from chatbot.infrastructure.anthropic_client import AnthropicTextGenerator
from chatbot.infrastructure.backend_client import DeliberationBackendClient
from chatbot.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    generator: TextGenerator | None = None,
    backend: DeliberationBackend | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        owned = []
        if generator is None or backend is None:
            settings.require_credentials()
        app.state.settings = settings
        app.state.sessions = SessionStore()
        if generator is None:
            app.state.generator = AnthropicTextGenerator(
                api_key=settings.anthropic_api_key,
                model=settings.chat_model,
                timeout_seconds=settings.anthropic_timeout_seconds,
            )
            owned.append(app.state.generator)
        else:
            app.state.generator = generator
        if backend is None:
            app.state.backend = DeliberationBackendClient(
                base_url=settings.backend_api_url,
                api_key=settings.admin_api_key,
                timeout_seconds=settings.backend_timeout_seconds,
            )
            owned.append(app.state.backend)
        else:
            app.state.backend = backend
        logger.info("Deliberation chatbot started")
        yield
        logger.info("Deliberation chatbot shutting down")
        for client in owned:
            await client.aclose()

    app = FastAPI(
        title="Deliberation Chatbot", version="1.0.0", lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(sessions.router)
    app.include_router(chat_socket.router)
    register_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
