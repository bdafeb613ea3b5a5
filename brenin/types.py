"""
Shared type definitions
"""
from datetime import datetime
from enum import Enum
from typing import TypedDict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from brenin.utils.helpers import generate_message_id, describe_file_kind


class Sender(str, Enum):
    """Author of a chat message"""
    USER = "user"
    AI = "ai"


class SelectedFile(BaseModel):
    """A file picked by the user, described by metadata only"""
    name: str
    mime_type: str = "unknown"
    size_bytes: int = Field(ge=0)

    @field_validator("mime_type", mode="before")
    @classmethod
    def default_mime_type(cls, value: Optional[str]) -> str:
        return value or "unknown"


class Attachment(BaseModel):
    """A pending or sent attachment holding an ephemeral local handle"""
    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    size_bytes: int
    handle: str

    @property
    def kind(self) -> str:
        return describe_file_kind(self.mime_type)


class Message(BaseModel):
    """One chat turn. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_message_id)
    content: str
    sender: Sender
    timestamp: datetime = Field(default_factory=datetime.now)
    attachments: Optional[Tuple[Attachment, ...]] = None


class CompletionRequestPayload(TypedDict, total=False):
    """Body posted to the completion endpoint"""
    message: str
    context: Optional[str]

