"""
Async client for the completion endpoint
"""
import asyncio
from typing import Optional
import httpx
from config.settings import settings
from brenin.types import CompletionRequestPayload
from brenin.utils.logger import get_logger
from brenin.utils.exceptions import CompletionAPIError

logger = get_logger(__name__)


class CompletionClient:
    """
    Posts an utterance and a system context to the completion endpoint.

    Every failure mode (transport error, timeout, non-2xx status, payload
    without a usable "response" field) surfaces as CompletionAPIError.
    Only connect failures are retried. Once a request has been sent, read
    timeouts and HTTP error statuses raise on the first attempt.
    """

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.endpoint_url = endpoint_url or settings.completion_endpoint_url
        self.timeout = settings.completion_timeout_seconds if timeout is None else timeout
        self.max_retries = settings.completion_max_retries if max_retries is None else max_retries
        self.retry_delay = settings.completion_retry_delay if retry_delay is None else retry_delay
        self._transport = transport

    async def complete(self, message: str, context: Optional[str] = None) -> str:
        """
        Request a reply

        Args:
            message: user utterance
            context: system context (None uses the assistant persona)

        Returns:
            reply text

        Raises:
            CompletionAPIError: on any failure
        """
        payload: CompletionRequestPayload = {
            "message": message,
            "context": context or settings.system_context,
        }
        last_exception: Optional[Exception] = None

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    response = await client.post(self.endpoint_url, json=payload)
                    response.raise_for_status()
                    return self._parse_reply(response)

                except httpx.HTTPStatusError as e:
                    status = e.response.status_code
                    logger.warning(f"Completion endpoint returned {status}")
                    raise CompletionAPIError(f"HTTP {status}", status_code=status) from e

                except (httpx.ConnectError, httpx.ConnectTimeout) as e:
                    last_exception = e
                    if attempt == self.max_retries:
                        break
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(
                        f"Completion request failed (attempt {attempt + 1}/{self.max_retries + 1}), "
                        f"retrying in {delay:.1f}s: {e!r}"
                    )
                    await asyncio.sleep(delay)

                except httpx.RequestError as e:
                    logger.warning(f"Completion request failed after sending: {e!r}")
                    raise CompletionAPIError(f"request failed: {e!r}") from e

        raise CompletionAPIError(f"request failed: {last_exception!r}") from last_exception

    @staticmethod
    def _parse_reply(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError as e:
            raise CompletionAPIError("malformed JSON payload", status_code=response.status_code) from e

        reply = data.get("response") if isinstance(data, dict) else None
        if not isinstance(reply, str) or not reply.strip():
            raise CompletionAPIError("missing reply field", status_code=response.status_code)
        return reply
