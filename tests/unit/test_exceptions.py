"""
Exception class unit tests
"""
from brenin.utils.exceptions import (
    BreninError,
    SessionNotFoundError,
    InvalidInputError,
    CompletionAPIError,
    InfoServiceError
)


def test_session_not_found_error():
    """SessionNotFoundError"""
    error = SessionNotFoundError("sess_123")
    assert error.session_id == "sess_123"
    assert "sess_123" in str(error)


def test_invalid_input_error():
    """InvalidInputError"""
    error = InvalidInputError("bad index", "index")
    assert error.field == "index"
    assert "Invalid input" in str(error)


def test_completion_api_error():
    """CompletionAPIError"""
    error = CompletionAPIError("HTTP 500", 500)
    assert error.status_code == 500
    assert "Completion API error" in str(error)


def test_info_service_error():
    """InfoServiceError"""
    error = InfoServiceError("unreachable", category="weather")
    assert error.category == "weather"
    assert error.status_code is None
    assert "Info service error" in str(error)


def test_hierarchy():
    """All errors share the base class"""
    for error in (
        SessionNotFoundError("s"),
        InvalidInputError("m"),
        CompletionAPIError("m"),
        InfoServiceError("m"),
    ):
        assert isinstance(error, BreninError)
