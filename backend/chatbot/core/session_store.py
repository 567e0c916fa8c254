"""Session Store: in-memory registry of live conversation sessions.

Invariants:
    - Session ids are uuid4 hex strings, unique within the process
    - history is append-only and ordered by add_message call order
    - add_message on an unknown id returns None and mutates nothing
    - A session lives from connection accept until remove() on close

Design Decisions:
    - Explicit registry object (owned by the app, passed to each connection)
      instead of a module-level dict
    - No locking: point lookups and inserts never span an await
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from chatbot.core.domain_types import (
    ChatMessage, MessageId, ProjectId, SessionId, Sender,
)

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Server-side conversational state bound to one connection and one project."""

    id: SessionId
    project_id: ProjectId
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _history: list[ChatMessage] = field(default_factory=list, repr=False)

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._history)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "created_at": self.created_at.isoformat(),
            "history": [m.to_dict() for m in self._history],
        }


class SessionStore:
    """Maps session id to Session. One instance per application."""

    def __init__(self) -> None:
        self._sessions: dict[SessionId, Session] = {}

    def create(self, project_id: str) -> Session:
        session = Session(
            id=SessionId(uuid.uuid4().hex), project_id=ProjectId(project_id),
        )
        self._sessions[session.id] = session
        logger.info(
            "Session created",
            extra={"session_id": session.id, "project_id": project_id},
        )
        return session

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(SessionId(session_id))

    def add_message(
        self, session_id: str, content: str, sender: Sender,
    ) -> ChatMessage | None:
        session = self.get(session_id)
        if session is None:
            return None
        message = ChatMessage(
            id=MessageId(uuid.uuid4().hex), sender=sender, content=content,
        )
        session._history.append(message)
        return message

    def remove(self, session_id: str) -> Session | None:
        session = self._sessions.pop(SessionId(session_id), None)
        if session is not None:
            logger.info(
                "Session evicted",
                extra={"session_id": session_id, "project_id": session.project_id},
            )
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
