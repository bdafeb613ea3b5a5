"""
In-memory chat session management
"""
import re
from typing import Callable, Dict, Optional
from brenin.services.chat_session import ChatSession
from brenin.services.response_resolver import ResponseResolver
from brenin.utils.exceptions import SessionNotFoundError
from brenin.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_ID_PATTERN = re.compile(r"sess_[0-9a-f]{12}")


class SessionManager:
    """Keeps live ChatSession objects by session ID. Nothing is persisted."""

    def __init__(self, resolver_factory: Optional[Callable[[], ResponseResolver]] = None):
        """
        Args:
            resolver_factory: builds the resolver for each new session
                (None builds a ResponseResolver from settings)
        """
        self.resolver_factory = resolver_factory or ResponseResolver
        self._sessions: Dict[str, ChatSession] = {}

    def create_session(self, system_context: Optional[str] = None) -> ChatSession:
        """
        Create a new session

        Args:
            system_context: system context sent with completion calls

        Returns:
            the new ChatSession
        """
        session = ChatSession(resolver=self.resolver_factory(), system_context=system_context)
        self._sessions[session.session_id] = session
        logger.info(f"Session created: {session.session_id}")
        return session

    def get_session(self, session_id: str) -> ChatSession:
        """
        Look up a session

        Raises:
            SessionNotFoundError: unknown or ended session
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> ChatSession:
        """Close a session and forget it"""
        session = self.get_session(session_id)
        session.close()
        del self._sessions[session_id]
        return session

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.end_session(session_id)

    def __len__(self) -> int:
        return len(self._sessions)


def validate_session_id(session_id: str) -> bool:
    """
    Check session ID format

    Args:
        session_id: session ID

    Returns:
        True when the ID has the sess_ prefix and a 12 character hex suffix
    """
    return bool(session_id) and SESSION_ID_PATTERN.fullmatch(session_id) is not None


# Global session manager instance
session_manager = SessionManager()
