"""
Session manager unit tests
"""
import pytest
from brenin.services.session_manager import SessionManager, validate_session_id
from brenin.utils.exceptions import SessionNotFoundError


@pytest.fixture
def manager(make_resolver):
    return SessionManager(resolver_factory=make_resolver)


def test_create_and_get(manager):
    """Created sessions can be looked up"""
    session = manager.create_session(system_context="Be terse.")

    assert manager.get_session(session.session_id) is session
    assert session.system_context == "Be terse."
    assert len(manager) == 1


def test_get_unknown(manager):
    """Unknown IDs raise"""
    with pytest.raises(SessionNotFoundError):
        manager.get_session("sess_000000000000")


def test_end_session_closes_and_forgets(manager, selected_file):
    """Ending a session releases its handles"""
    session = manager.create_session()
    session.add_attachments([selected_file()])

    manager.end_session(session.session_id)

    assert session.closed
    assert session.registry.live_count == 0
    with pytest.raises(SessionNotFoundError):
        manager.get_session(session.session_id)


def test_sessions_are_isolated(manager, selected_file):
    """Each session owns its own log and handles"""
    first = manager.create_session()
    second = manager.create_session()
    first.add_attachments([selected_file()])

    assert first.registry is not second.registry
    assert second.pending_attachments == ()


def test_close_all(manager):
    """close_all empties the manager"""
    manager.create_session()
    manager.create_session()

    manager.close_all()

    assert len(manager) == 0


@pytest.mark.parametrize("session_id, valid", [
    ("sess_0123456789ab", True),
    ("sess_0123456789", False),
    ("sess_zzzzzzzzzzzz", False),
    ("sess_-0000000000a", False),
    ("sess_+0000000000a", False),
    ("sess_0123456789AB", False),
    ("sess_0123456789ab\n", False),
    ("chat_0123456789ab", False),
    ("", False),
])
def test_validate_session_id(session_id, valid):
    """Session ID format check"""
    assert validate_session_id(session_id) is valid
