"""
Completion client unit tests
"""
import asyncio
import json
import httpx
import pytest
from config.settings import settings
from brenin.services.completion_client import CompletionClient
from brenin.utils.exceptions import CompletionAPIError


def _client(transport, **kwargs) -> CompletionClient:
    kwargs.setdefault("max_retries", 0)
    kwargs.setdefault("retry_delay", 0)
    return CompletionClient(endpoint_url="http://completion.test/api/deepseek", transport=transport, **kwargs)


def test_complete_success_posts_message_and_context(json_transport):
    """Reply text is returned and the body carries message and context"""
    transport = json_transport(200, {"response": "Hi from the model"})

    reply = asyncio.run(_client(transport).complete("hello", "Be brief."))

    assert reply == "Hi from the model"
    body = json.loads(transport.requests[0].content)
    assert body == {"message": "hello", "context": "Be brief."}
    assert transport.requests[0].method == "POST"


def test_complete_defaults_context_to_persona(json_transport):
    """Missing context falls back to the assistant persona"""
    transport = json_transport(200, {"response": "ok"})

    asyncio.run(_client(transport).complete("hello"))

    body = json.loads(transport.requests[0].content)
    assert body["context"] == settings.system_context
    assert "Brenin AI" in body["context"]


def test_complete_non_success_status(json_transport):
    """HTTP error statuses raise without retrying"""
    transport = json_transport(500, {"error": "Internal server error"})

    with pytest.raises(CompletionAPIError) as exc_info:
        asyncio.run(_client(transport, max_retries=3).complete("hello"))

    assert exc_info.value.status_code == 500
    assert len(transport.requests) == 1


@pytest.mark.parametrize("payload", [
    {},
    {"response": ""},
    {"response": "   "},
    {"response": None},
    ["not", "a", "dict"],
])
def test_complete_missing_reply_field(json_transport, payload):
    """Payloads without a usable reply raise"""
    with pytest.raises(CompletionAPIError):
        asyncio.run(_client(json_transport(200, payload)).complete("hello"))


def test_complete_malformed_json():
    """Non-JSON bodies raise"""
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(CompletionAPIError):
        asyncio.run(_client(transport).complete("hello"))


def test_complete_network_error_retries(unreachable_transport):
    """Connection errors are retried, then raised"""
    transport = unreachable_transport()

    with pytest.raises(CompletionAPIError):
        asyncio.run(_client(transport, max_retries=2).complete("hello"))

    assert len(transport.requests) == 3


def test_complete_recovers_after_transient_error():
    """A retry after a connection error can succeed"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectTimeout("connect timed out", request=request)
        return httpx.Response(200, json={"response": "second try"})

    reply = asyncio.run(_client(httpx.MockTransport(handler), max_retries=1).complete("hello"))

    assert reply == "second try"
    assert len(calls) == 2


@pytest.mark.parametrize("error", [httpx.ReadTimeout, httpx.RemoteProtocolError])
def test_complete_sent_request_not_reposted(error):
    """Failures after the request was sent raise without a second POST"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise error("upstream went quiet", request=request)

    client = CompletionClient(
        endpoint_url="http://completion.test/api/deepseek",
        transport=httpx.MockTransport(handler),
        retry_delay=0
    )

    with pytest.raises(CompletionAPIError):
        asyncio.run(client.complete("hello"))

    assert client.max_retries == settings.completion_max_retries
    assert len(calls) == 1


def test_default_timeout_covers_server_budget():
    """The client waits longer than one server-side DeepSeek call"""
    client = CompletionClient()

    assert client.timeout == settings.completion_timeout_seconds
    assert client.timeout > settings.deepseek_timeout_seconds
