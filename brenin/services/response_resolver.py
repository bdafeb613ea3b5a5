"""
Tiered reply resolution
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence
from config.fallback_rules import get_info_category, get_category_fallback, get_local_reply
from brenin.types import Attachment
from brenin.services.completion_client import CompletionClient
from brenin.services.info_client import InfoServiceClient
from brenin.utils.exceptions import CompletionAPIError, InfoServiceError
from brenin.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

APOLOGY_MESSAGE = "I apologize, but I could not generate a response."

TIER_ATTACHMENTS = "attachments"
TIER_COMPLETION = "completion"
TIER_INFO_SERVICE = "info_service"
TIER_INFO_FALLBACK = "info_fallback"
TIER_LOCAL_RULES = "local_rules"
TIER_EXHAUSTED = "exhausted"


@dataclass
class Resolution:
    """A reply and the tier that produced it"""
    text: str
    tier: str
    category: Optional[str] = None


def describe_attachments(attachments: Sequence[Attachment]) -> str:
    """
    Reply listing uploaded files by name and kind, without reading them

    Args:
        attachments: attachments sent with the turn

    Returns:
        reply text
    """
    names = ", ".join(attachment.name for attachment in attachments)
    kinds = ", ".join(attachment.kind for attachment in attachments)
    return (
        f"I can see you've uploaded {len(attachments)} file(s): {names}. "
        f"These appear to be {kinds}. While I can't directly process the file contents yet, "
        "I can help you with questions about file management, organization, or general "
        "information about these file types. What would you like to know?"
    )


class ResponseResolver:
    """
    Produces exactly one reply per turn by trying, in order:
    attachment description, the completion endpoint, info service routing
    (with a canned per-category fallback) and the local keyword rules.
    """

    def __init__(
        self,
        completion_client: Optional[CompletionClient] = None,
        info_client: Optional[InfoServiceClient] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.completion_client = completion_client or CompletionClient()
        self.info_client = info_client or InfoServiceClient()
        self.clock = clock or datetime.now

    async def resolve(
        self,
        utterance: str,
        attachments: Optional[Sequence[Attachment]] = None,
        context: Optional[str] = None
    ) -> str:
        resolution = await self.resolve_detailed(utterance, attachments, context)
        return resolution.text

    @log_execution_time()
    async def resolve_detailed(
        self,
        utterance: str,
        attachments: Optional[Sequence[Attachment]] = None,
        context: Optional[str] = None
    ) -> Resolution:
        """
        Resolve a reply and report which tier answered

        Args:
            utterance: user text
            attachments: attachments sent with the turn
            context: system context for the completion call

        Returns:
            Resolution
        """
        if attachments:
            return Resolution(describe_attachments(attachments), TIER_ATTACHMENTS)

        reply = await self._try_completion(utterance, context)
        if reply is not None:
            return Resolution(reply, TIER_COMPLETION)

        resolution = await self._try_info_service(utterance)
        if resolution is not None:
            return resolution

        try:
            return Resolution(get_local_reply(utterance, now=self.clock()), TIER_LOCAL_RULES)
        except Exception as e:
            logger.error(f"Local rules failed: {str(e)}", exc_info=True)

        logger.error("All reply tiers exhausted")
        return Resolution(APOLOGY_MESSAGE, TIER_EXHAUSTED)

    async def _try_completion(self, utterance: str, context: Optional[str]) -> Optional[str]:
        try:
            return await self.completion_client.complete(utterance, context)
        except CompletionAPIError as e:
            logger.warning(f"Completion tier failed, falling through: {str(e)}")
        except Exception as e:
            logger.error(f"Completion tier raised unexpectedly: {str(e)}", exc_info=True)
        return None

    async def _try_info_service(self, utterance: str) -> Optional[Resolution]:
        category = get_info_category(utterance)
        if category is None:
            return None

        try:
            message = await self.info_client.fetch(category)
            return Resolution(message, TIER_INFO_SERVICE, category)
        except InfoServiceError as e:
            logger.warning(f"Info service failed for {category}, using canned reply: {str(e)}")
        except Exception as e:
            logger.error(f"Info tier raised unexpectedly for {category}: {str(e)}", exc_info=True)

        return Resolution(get_category_fallback(category), TIER_INFO_FALLBACK, category)
