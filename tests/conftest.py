"""
Pytest configuration and fixtures
"""
import httpx
import pytest
from fastapi.testclient import TestClient
from config.settings import settings
from brenin.types import SelectedFile
from brenin.services.chat_session import ChatSession
from brenin.services.completion_client import CompletionClient
from brenin.services.info_client import InfoServiceClient
from brenin.services.object_url_registry import ObjectUrlRegistry
from brenin.services.response_resolver import ResponseResolver


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served"""

    def __init__(self, handler):
        self.requests = []

        def _handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handler)


@pytest.fixture
def json_transport():
    """Factory: transport answering every request with one status and JSON body"""
    def _factory(status_code: int, payload=None) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))
    return _factory


@pytest.fixture
def unreachable_transport():
    """Factory: transport failing every request with a connection error"""
    def _factory() -> RecordingTransport:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)
        return RecordingTransport(_handler)
    return _factory


@pytest.fixture
def make_resolver(json_transport, unreachable_transport):
    """
    Factory: resolver whose completion endpoint and info service are stubbed.
    Pass a transport, or None for an unreachable upstream.
    """
    def _factory(completion=None, info=None, clock=None) -> ResponseResolver:
        return ResponseResolver(
            completion_client=CompletionClient(
                endpoint_url="http://completion.test/api/deepseek",
                transport=completion or unreachable_transport(),
                max_retries=0,
                retry_delay=0
            ),
            info_client=InfoServiceClient(
                base_url="http://info.test",
                transport=info or unreachable_transport()
            ),
            clock=clock
        )
    return _factory


@pytest.fixture
def registry():
    return ObjectUrlRegistry()


@pytest.fixture
def make_session(make_resolver, registry):
    """Factory: session with no typing delay and stubbed upstreams"""
    def _factory(resolver=None, **kwargs) -> ChatSession:
        kwargs.setdefault("typing_delay_seconds", 0)
        kwargs.setdefault("highlight_seconds", 3.0)
        return ChatSession(resolver=resolver or make_resolver(), registry=registry, **kwargs)
    return _factory


@pytest.fixture
def selected_file():
    """Factory for SelectedFile metadata"""
    def _factory(name="notes.txt", mime_type="text/plain", size_bytes=1024) -> SelectedFile:
        return SelectedFile(name=name, mime_type=mime_type, size_bytes=size_bytes)
    return _factory


@pytest.fixture
def no_typing_delay(monkeypatch):
    monkeypatch.setattr(settings, "typing_delay_seconds", 0.0)


@pytest.fixture
def client(no_typing_delay):
    """Chat API test client"""
    from brenin.api.main import app
    return TestClient(app)


@pytest.fixture
def info_client_app():
    """Info service test client"""
    from brenin.api.info_service import app
    return TestClient(app)
