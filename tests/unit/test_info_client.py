"""
Info service client unit tests
"""
import asyncio
import pytest
from brenin.services.info_client import InfoServiceClient
from brenin.utils.exceptions import InfoServiceError


def _client(transport) -> InfoServiceClient:
    return InfoServiceClient(base_url="http://info.test/", transport=transport)


@pytest.mark.parametrize("category, path", [
    ("weather", "/api/weather"),
    ("news", "/api/news"),
    ("employment", "/api/employment"),
    ("market", "/api/market"),
    ("projects", "/api/brenin_projects"),
])
def test_fetch_uses_category_path(json_transport, category, path):
    """Each category maps to its endpoint"""
    transport = json_transport(200, {"message": f"{category} data"})

    message = asyncio.run(_client(transport).fetch(category))

    assert message == f"{category} data"
    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == path


def test_fetch_unknown_category(json_transport):
    """Unknown categories fail before any request"""
    transport = json_transport(200, {"message": "x"})

    with pytest.raises(InfoServiceError) as exc_info:
        asyncio.run(_client(transport).fetch("horoscope"))

    assert exc_info.value.category == "horoscope"
    assert transport.requests == []


def test_fetch_non_success_status(json_transport):
    """HTTP errors raise with the status"""
    with pytest.raises(InfoServiceError) as exc_info:
        asyncio.run(_client(json_transport(503, {"message": "down"})).fetch("market"))

    assert exc_info.value.status_code == 503
    assert exc_info.value.category == "market"


def test_fetch_unreachable(unreachable_transport):
    """Connection failures raise"""
    with pytest.raises(InfoServiceError):
        asyncio.run(_client(unreachable_transport()).fetch("weather"))


def test_fetch_missing_message(json_transport):
    """Payload without message raises"""
    with pytest.raises(InfoServiceError):
        asyncio.run(_client(json_transport(200, {"temperature": 72})).fetch("weather"))
