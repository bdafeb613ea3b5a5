"""
Custom exception classes
"""


class BreninError(Exception):
    """Base exception"""
    pass


class SessionNotFoundError(BreninError):
    """Raised when a chat session does not exist"""
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class InvalidInputError(BreninError):
    """Raised on invalid input"""
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(f"Invalid input: {message}")


class CompletionAPIError(BreninError):
    """Raised when the completion endpoint call fails"""
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(f"Completion API error: {message}")


class InfoServiceError(BreninError):
    """Raised when the info service call fails"""
    def __init__(self, message: str, category: str = None, status_code: int = None):
        self.category = category
        self.status_code = status_code
        super().__init__(f"Info service error: {message}")
