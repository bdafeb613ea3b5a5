"""
DeepSeek chat completion client (OpenAI-compatible API)
"""
import time
from typing import List, Dict, Any, Optional
from openai import OpenAI
from openai import RateLimitError, APIError, APIConnectionError, APITimeoutError
from config.settings import settings
from brenin.utils.logger import get_logger
from brenin.utils.exceptions import CompletionAPIError

logger = get_logger(__name__)


class DeepSeekClient:
    """Wrapper around the OpenAI SDK pointed at DeepSeek"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0
    ):
        """
        Initialize the client. The SDK client is built on first use so a
        missing key only fails the call, not the import.

        Args:
            api_key: DeepSeek API key (None reads settings)
            model: model name (None reads settings)
            base_url: API base URL (None reads settings)
            max_retries: maximum attempts
            retry_delay: base delay between attempts in seconds
        """
        self.api_key = api_key or settings.deepseek_api_key
        self.model = model or settings.deepseek_model
        self.base_url = base_url or settings.deepseek_base_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._client: Optional[OpenAI] = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> OpenAI:
        if not self.configured:
            raise CompletionAPIError("DeepSeek API key not configured", status_code=500)
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=settings.deepseek_timeout_seconds,
                max_retries=0
            )
            logger.info(f"DeepSeek client ready: model={self.model}")
        return self._client

    def _retry_with_backoff(self, func, *args, **kwargs):
        """
        Retry with exponential backoff

        Args:
            func: callable to run
            *args, **kwargs: callable arguments

        Returns:
            callable result
        """
        last_exception = None

        for attempt in range(self.max_retries):
            try:
                return func(*args, **kwargs)

            except RateLimitError as e:
                wait_time = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Rate limited (attempt {attempt + 1}/{self.max_retries}), "
                    f"retrying in {wait_time}s..."
                )
                time.sleep(wait_time)
                last_exception = e

            except APITimeoutError as e:
                # Sent already; not retried
                logger.error(f"DeepSeek request timed out after {settings.deepseek_timeout_seconds}s")
                raise CompletionAPIError(f"timed out: {str(e)}", status_code=504)

            except APIConnectionError as e:
                wait_time = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Connection error (attempt {attempt + 1}/{self.max_retries}), "
                    f"retrying in {wait_time}s..."
                )
                time.sleep(wait_time)
                last_exception = e

            except APIError as e:
                # Not retryable
                logger.error(f"DeepSeek API error: {str(e)}")
                raise CompletionAPIError(str(e), status_code=getattr(e, 'status_code', None))

        raise CompletionAPIError(
            f"retries exhausted: {str(last_exception)}",
            status_code=getattr(last_exception, 'status_code', None) if last_exception else None
        )

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Call the chat completions API

        Args:
            messages: role/content message list
            temperature: sampling temperature (None reads settings)
            max_tokens: token ceiling (None reads settings)
            **kwargs: extra API parameters

        Returns:
            dict with content, role, model, finish_reason
        """
        client = self.client

        def _call():
            return client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=settings.completion_temperature if temperature is None else temperature,
                max_tokens=max_tokens or settings.completion_max_tokens,
                stream=False,
                **kwargs
            )

        response = self._retry_with_backoff(_call)

        choice = response.choices[0] if response.choices else None
        result = {
            "content": choice.message.content if choice else None,
            "role": choice.message.role if choice else None,
            "model": response.model,
            "finish_reason": choice.finish_reason if choice else None
        }

        logger.debug(f"Chat completion ok: model={result['model']}")
        return result

    def reply(self, message: str, context: Optional[str] = None) -> Optional[str]:
        """
        Single-turn reply with a system context

        Args:
            message: user utterance
            context: system context (None uses the assistant persona)

        Returns:
            reply text, None when the API returned no content
        """
        result = self.chat_completion(
            messages=[
                {"role": "system", "content": context or settings.system_context},
                {"role": "user", "content": message},
            ]
        )
        return result.get("content") or None


# Global DeepSeek client instance
deepseek_client = DeepSeekClient()
