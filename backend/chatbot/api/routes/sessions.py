"""Session Inspection: read-only HTTP view of live chat sessions.

Invariants:
    - Never mutates the store
    - Unknown or already evicted session → 404 via SessionNotFoundError
"""

from fastapi import APIRouter, Request

from chatbot.core.errors import SessionNotFoundError

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request):
    """Snapshot of a live session: project, creation time and full history."""
    session = request.app.state.sessions.get(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session.to_dict()
