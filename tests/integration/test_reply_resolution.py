"""
End-to-end reply resolution through a session
"""
import asyncio
import httpx
import pytest
from brenin.api.info_service import app as info_app
from brenin.services.completion_client import CompletionClient
from brenin.services.info_client import InfoServiceClient
from brenin.services.response_resolver import ResponseResolver


@pytest.mark.integration
def test_weather_turn_with_completion_down(make_session, make_resolver, json_transport):
    """Completion HTTP 500 + info service 72F sunny → reply is 72F sunny"""
    completion = json_transport(500, {"error": "Internal server error"})
    info = json_transport(200, {"message": "72F sunny"})
    session = make_session(resolver=make_resolver(completion=completion, info=info))

    reply = asyncio.run(session.send("What's the weather?"))

    assert reply.content == "72F sunny"
    assert [m.sender.value for m in session.messages] == ["ai", "user", "ai"]
    assert session.awaiting_reply is False
    assert len(completion.requests) == 1
    assert info.requests[0].url.path == "/api/weather"


@pytest.mark.integration
def test_market_turn_against_info_app(make_session, json_transport):
    """The resolver reads the real info service app"""
    resolver = ResponseResolver(
        completion_client=CompletionClient(
            endpoint_url="http://completion.test/api/deepseek",
            transport=json_transport(503, {}),
            max_retries=0
        ),
        info_client=InfoServiceClient(
            base_url="http://info.test",
            transport=httpx.ASGITransport(app=info_app)
        )
    )
    session = make_session(resolver=resolver)

    reply = asyncio.run(session.send("How is the stock market today?"))

    assert reply.content.startswith("📈 Markets Today")


@pytest.mark.integration
def test_everything_down_still_replies(make_session):
    """Both upstreams unreachable → canned reply, session not stuck"""
    session = make_session()

    reply = asyncio.run(session.send("any news?"))

    assert reply.content.startswith("I can't reach the news feed")
    assert session.awaiting_reply is False
