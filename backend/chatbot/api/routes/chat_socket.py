"""Chat Socket: WebSocket entry point that routes a connection to a project-scoped session.

Invariants:
    - Only /project/{project_id}/chat is routed; any other path is refused by the
      router before the handshake (no accept, no error frame)
    - One Session per accepted connection, created right after the handshake
    - Frames are processed strictly one at a time: the next frame is not read until
      the current turn's reply has been sent
    - The session is evicted from the store when the connection closes or fails

Design Decisions:
    - Collaborators read from app.state: set once by the lifespan, shared by all
      connections; the orchestrator and its components are per connection
    - Unexpected exceptions in a turn are logged and answered with a generic error
      frame; the connection stays open
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from chatbot.api.error_handlers import internal_error
from chatbot.core.language_strings import get_strings
from chatbot.core.session_store import Session
from chatbot.services.message_analyzer import MessageAnalyzer
from chatbot.services.orchestrator import ConversationOrchestrator
from chatbot.services.response_composer import ResponseComposer
from chatbot.services.stance_context import StanceContextResolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


def build_orchestrator(session: Session, state) -> ConversationOrchestrator:
    strings = get_strings(state.settings.reply_locale)
    return ConversationOrchestrator(
        session.id,
        session.project_id,
        store=state.sessions,
        backend=state.backend,
        analyzer=MessageAnalyzer(state.generator, state.backend, strings),
        resolver=StanceContextResolver(state.backend),
        composer=ResponseComposer(state.generator, strings),
        strings=strings,
    )


async def _receive_payload(websocket: WebSocket) -> str | bytes:
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    if message.get("text") is not None:
        return message["text"]
    return message.get("bytes") or b""


@router.websocket("/project/{project_id}/chat")
async def chat_socket(websocket: WebSocket, project_id: str):
    state = websocket.app.state
    await websocket.accept()
    session = state.sessions.create(project_id)
    orchestrator = build_orchestrator(session, state)
    log_extra = {"session_id": session.id, "project_id": project_id}
    logger.info("Connection established", extra=log_extra)

    try:
        while True:
            raw = await _receive_payload(websocket)
            try:
                frame = await orchestrator.handle_frame(raw)
            except Exception as e:
                logger.error(
                    f"Unhandled error while processing frame: {e}",
                    exc_info=True, extra=log_extra,
                )
                frame = internal_error().to_frame()
            if frame is not None:
                await websocket.send_json(frame)
    except WebSocketDisconnect as e:
        logger.info(f"Connection closed (code={e.code})", extra=log_extra)
    finally:
        state.sessions.remove(session.id)
