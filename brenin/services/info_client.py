"""
Async client for the info service
"""
from typing import Optional
import httpx
from config.settings import settings
from config.fallback_rules import INFO_CATEGORIES
from brenin.utils.logger import get_logger
from brenin.utils.exceptions import InfoServiceError

logger = get_logger(__name__)


class InfoServiceClient:
    """Fetches the canned message for an info category"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.info_service_url).rstrip("/")
        self.timeout = settings.request_timeout_seconds if timeout is None else timeout
        self._transport = transport

    def url_for(self, category: str) -> str:
        config = INFO_CATEGORIES.get(category)
        if config is None:
            raise InfoServiceError(f"unknown category '{category}'", category=category)
        return f"{self.base_url}/api/{config['path']}"

    async def fetch(self, category: str) -> str:
        """
        Fetch a category message

        Args:
            category: weather, news, employment, market or projects

        Returns:
            message text

        Raises:
            InfoServiceError: unknown category, unreachable service, non-2xx
                status or a payload without a message
        """
        url = self.url_for(category)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise InfoServiceError(f"HTTP {status}", category=category, status_code=status) from e
        except httpx.RequestError as e:
            raise InfoServiceError(f"unreachable: {e!r}", category=category) from e
        except ValueError as e:
            raise InfoServiceError("malformed JSON payload", category=category) from e

        message = data.get("message") if isinstance(data, dict) else None
        if not isinstance(message, str) or not message.strip():
            raise InfoServiceError("missing message field", category=category)

        logger.debug(f"Info service reply for {category}: {message[:50]}")
        return message
