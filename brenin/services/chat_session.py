"""
Chat session state machine
"""
import asyncio
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, Any
from config.settings import settings
from brenin.types import Attachment, Message, SelectedFile, Sender
from brenin.services.object_url_registry import ObjectUrlRegistry
from brenin.services.response_resolver import ResponseResolver
from brenin.utils.exceptions import InvalidInputError
from brenin.utils.helpers import generate_session_id
from brenin.utils.logger import get_logger

logger = get_logger(__name__)

GREETING_MESSAGE = "Hello! I'm Brenin AI. How can I assist you?"
UPLOAD_PLACEHOLDER = "Uploaded files"
DEGRADED_NOTICE = (
    "Sorry, I'm having trouble reaching my services right now. "
    "Please try again in a moment."
)

ChangeListener = Callable[["ChatSession"], None]


class ChatSession:
    """
    Owns one conversation: the append-only message log, the draft text,
    the pending attachments and the awaiting-reply flag.

    Only one reply cycle runs at a time. submit() must be called from a
    running event loop; the reply is resolved in a task it returns.
    """

    def __init__(
        self,
        resolver: Optional[ResponseResolver] = None,
        registry: Optional[ObjectUrlRegistry] = None,
        session_id: Optional[str] = None,
        system_context: Optional[str] = None,
        max_attachments: Optional[int] = None,
        max_file_size_bytes: Optional[int] = None,
        max_avatar_size_bytes: Optional[int] = None,
        typing_delay_seconds: Optional[float] = None,
        highlight_seconds: Optional[float] = None,
        greeting: Optional[str] = GREETING_MESSAGE
    ):
        self.session_id = session_id or generate_session_id()
        self.resolver = resolver or ResponseResolver()
        self.registry = registry or ObjectUrlRegistry()
        self.system_context = system_context
        self.max_attachments = settings.max_attachments if max_attachments is None else max_attachments
        self.max_file_size_bytes = (
            settings.max_file_size_bytes if max_file_size_bytes is None else max_file_size_bytes
        )
        self.max_avatar_size_bytes = (
            settings.max_avatar_size_bytes if max_avatar_size_bytes is None else max_avatar_size_bytes
        )
        self.typing_delay_seconds = (
            settings.typing_delay_seconds if typing_delay_seconds is None else typing_delay_seconds
        )
        self.highlight_seconds = (
            settings.new_message_highlight_seconds if highlight_seconds is None else highlight_seconds
        )

        self.draft: str = ""
        self.awaiting_reply: bool = False
        self.avatar: Optional[Attachment] = None
        self._messages: List[Message] = []
        self._pending: List[Attachment] = []
        self._new_ids: Set[str] = set()
        self._highlight_timers: Dict[str, asyncio.TimerHandle] = {}
        self._listeners: List[ChangeListener] = []
        self._reply_task: Optional[asyncio.Task] = None
        self._closed = False

        if greeting:
            self._append(Message(content=greeting, sender=Sender.AI))

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def pending_attachments(self) -> Tuple[Attachment, ...]:
        return tuple(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def is_new(self, message_id: str) -> bool:
        return message_id in self._new_ids

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback run after every message log mutation"""
        self._listeners.append(listener)

    def set_draft(self, text: Optional[str]) -> None:
        self.draft = text or ""

    # ------------------------------------------------------------------
    # Send lifecycle
    # ------------------------------------------------------------------

    def submit(self) -> Optional["asyncio.Task[Message]"]:
        """
        Commit the draft and pending attachments as a user turn

        Returns:
            the reply task, or None when the submit was a no-op (empty draft
            with no attachments, or a reply already in flight)
        """
        if self._closed or self.awaiting_reply:
            return None

        text = self.draft
        if not text.strip() and not self._pending:
            return None

        loop = asyncio.get_running_loop()
        attachments = tuple(self._pending)

        self._append(Message(
            content=text if text.strip() else UPLOAD_PLACEHOLDER,
            sender=Sender.USER,
            attachments=attachments or None
        ))
        self.draft = ""
        self._pending = []
        self.awaiting_reply = True

        logger.info(
            f"Turn submitted: session_id={self.session_id}, "
            f"chars={len(text)}, attachments={len(attachments)}"
        )
        self._reply_task = loop.create_task(self._reply_cycle(text, attachments))
        return self._reply_task

    def on_resolved(self, reply_text: str) -> Message:
        """
        Append the ai reply and end the reply cycle

        Args:
            reply_text: resolved reply

        Returns:
            the appended ai Message
        """
        self.awaiting_reply = False
        message = Message(content=reply_text, sender=Sender.AI)
        self._append(message)
        return message

    async def send(self, text: str) -> Optional[Message]:
        """
        Submit text plus any pending attachments and wait for the reply

        Returns:
            the ai Message, or None when the submit was a no-op
        """
        self.set_draft(text)
        task = self.submit()
        if task is None:
            return None
        return await task

    async def _reply_cycle(self, utterance: str, attachments: Tuple[Attachment, ...]) -> Message:
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            reply = await self.resolver.resolve(
                utterance,
                attachments=list(attachments) or None,
                context=self.system_context
            )
            remaining = self.typing_delay_seconds - (loop.time() - started)
            if remaining > 0:
                await asyncio.sleep(remaining)
        except asyncio.CancelledError:
            if self._closed:
                self.awaiting_reply = False
            else:
                self.on_resolved(DEGRADED_NOTICE)
            raise
        except Exception as e:
            logger.error(f"Reply cycle failed: session_id={self.session_id} - {str(e)}", exc_info=True)
            reply = DEGRADED_NOTICE

        return self.on_resolved(reply)

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def add_attachments(self, files: Iterable[SelectedFile]) -> List[Attachment]:
        """
        Add selected files to the pending set. Oversized files and files
        beyond the cap are dropped without error.

        Args:
            files: selected files

        Returns:
            the attachments that were accepted
        """
        accepted: List[Attachment] = []
        for file in files:
            if file.size_bytes > self.max_file_size_bytes:
                logger.debug(f"Attachment dropped (too large): {file.name} {file.size_bytes} bytes")
                continue
            if len(self._pending) >= self.max_attachments:
                logger.debug(f"Attachment dropped (cap {self.max_attachments} reached): {file.name}")
                continue

            attachment = Attachment(
                name=file.name,
                mime_type=file.mime_type,
                size_bytes=file.size_bytes,
                handle=self.registry.create(file)
            )
            self._pending.append(attachment)
            accepted.append(attachment)

        return accepted

    def remove_attachment(self, index: int) -> Attachment:
        """
        Remove a pending attachment and release its handle

        Args:
            index: position in the pending set

        Returns:
            the removed attachment

        Raises:
            InvalidInputError: index out of range
        """
        if index < 0 or index >= len(self._pending):
            raise InvalidInputError(f"no pending attachment at index {index}", "index")

        attachment = self._pending.pop(index)
        self.registry.revoke(attachment.handle)
        return attachment

    def set_avatar(self, file: SelectedFile) -> Optional[Attachment]:
        """
        Replace the avatar image, releasing the superseded handle.
        Non-image or oversized files are dropped and the current avatar kept.

        Returns:
            the new avatar, or None when the file was dropped
        """
        if not file.mime_type.startswith("image/") or file.size_bytes > self.max_avatar_size_bytes:
            logger.debug(f"Avatar dropped: {file.name} ({file.mime_type}, {file.size_bytes} bytes)")
            return None

        self.clear_avatar()
        self.avatar = Attachment(
            name=file.name,
            mime_type=file.mime_type,
            size_bytes=file.size_bytes,
            handle=self.registry.create(file)
        )
        return self.avatar

    def clear_avatar(self) -> None:
        if self.avatar is not None:
            self.registry.revoke(self.avatar.handle)
            self.avatar = None

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Cancel timers and the in-flight reply, release every held handle"""
        if self._closed:
            return
        self._closed = True

        if self._reply_task is not None and not self._reply_task.done():
            self._reply_task.cancel()

        for timer in self._highlight_timers.values():
            timer.cancel()
        self._highlight_timers.clear()
        self._new_ids.clear()

        for attachment in self._pending:
            self.registry.revoke(attachment.handle)
        self._pending = []
        self.clear_avatar()
        for message in self._messages:
            for attachment in message.attachments or ():
                self.registry.revoke(attachment.handle)

        logger.info(f"Session closed: {self.session_id}")

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the session state"""
        return {
            "session_id": self.session_id,
            "messages": [
                {**message.model_dump(mode="json"), "is_new": self.is_new(message.id)}
                for message in self._messages
            ],
            "draft": self.draft,
            "pending_attachments": [attachment.model_dump() for attachment in self._pending],
            "avatar": self.avatar.model_dump() if self.avatar else None,
            "awaiting_reply": self.awaiting_reply,
            "closed": self._closed,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append(self, message: Message) -> None:
        self._messages.append(message)
        self._mark_new(message.id)
        for listener in list(self._listeners):
            listener(self)

    def _mark_new(self, message_id: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to run the decay timer, so the message is never flagged
            return
        self._new_ids.add(message_id)
        self._highlight_timers[message_id] = loop.call_later(
            self.highlight_seconds, self._expire_highlight, message_id
        )

    def _expire_highlight(self, message_id: str) -> None:
        self._new_ids.discard(message_id)
        self._highlight_timers.pop(message_id, None)
