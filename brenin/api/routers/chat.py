"""
Chat API router
"""
import asyncio
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Optional, List
from brenin.types import SelectedFile, Sender
from brenin.services.chat_session import ChatSession
from brenin.services.session_manager import SessionManager, session_manager, validate_session_id
from brenin.utils.exceptions import InvalidInputError
from brenin.utils.response import success_response
from brenin.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


# Request models
class ChatStartRequest(BaseModel):
    system_context: Optional[str] = None


class ChatMessageRequest(BaseModel):
    session_id: str
    user_message: str = ""


class ChatEndRequest(BaseModel):
    session_id: str


class AttachmentRequest(BaseModel):
    session_id: str
    files: List[SelectedFile] = Field(default_factory=list)


class AvatarRequest(BaseModel):
    session_id: str
    file: SelectedFile


def get_session_manager() -> SessionManager:
    return session_manager


def _load_session(manager: SessionManager, session_id: str) -> ChatSession:
    if not validate_session_id(session_id):
        raise InvalidInputError("Malformed session ID.", "session_id")
    return manager.get_session(session_id)


@router.post("/start")
async def start_chat(
    request: ChatStartRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """Start a chat session"""
    session = manager.create_session(system_context=request.system_context)
    greeting = session.messages[-1].content if session.messages else ""

    return success_response({
        "session_id": session.session_id,
        "bot_message": greeting
    })


@router.post("/message")
async def process_message(
    request: ChatMessageRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """Submit a user turn (with any pending attachments) and return the reply"""
    session = _load_session(manager, request.session_id)

    logger.info(
        f"Message received: session_id={request.session_id}, "
        f"user_message={request.user_message[:50]}..."
    )

    try:
        reply = await session.send(request.user_message)
    except asyncio.CancelledError:
        # The reply was cancelled by /chat/end; anything else propagates
        if not session.closed:
            raise
        logger.info(f"Session ended while awaiting a reply: session_id={session.session_id}")
        return success_response({
            "session_id": session.session_id,
            "accepted": False,
            "closed": True,
            "awaiting_reply": False
        }, message="Session ended")

    if reply is None:
        # Empty turn, or a reply is already in flight
        return success_response({
            "session_id": session.session_id,
            "accepted": False,
            "awaiting_reply": session.awaiting_reply
        })

    user_message = next(
        message for message in reversed(session.messages) if message.sender == Sender.USER
    )
    return success_response({
        "session_id": session.session_id,
        "accepted": True,
        "user_message": user_message.model_dump(mode="json"),
        "bot_message": reply.model_dump(mode="json"),
        "awaiting_reply": session.awaiting_reply
    })


@router.post("/attachments")
async def add_attachments(
    request: AttachmentRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """Add selected files (metadata only) to the pending set"""
    session = _load_session(manager, request.session_id)
    accepted = session.add_attachments(request.files)

    return success_response({
        "session_id": session.session_id,
        "accepted": [attachment.model_dump() for attachment in accepted],
        "dropped_count": len(request.files) - len(accepted),
        "pending": [attachment.model_dump() for attachment in session.pending_attachments]
    })


@router.delete("/attachments/{session_id}/{index}")
async def remove_attachment(
    session_id: str,
    index: int,
    manager: SessionManager = Depends(get_session_manager)
):
    """Remove a pending attachment"""
    session = _load_session(manager, session_id)
    removed = session.remove_attachment(index)

    return success_response({
        "session_id": session.session_id,
        "removed": removed.model_dump(),
        "pending": [attachment.model_dump() for attachment in session.pending_attachments]
    })


@router.post("/avatar")
async def set_avatar(
    request: AvatarRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """Replace the avatar image"""
    session = _load_session(manager, request.session_id)
    avatar = session.set_avatar(request.file)

    return success_response({
        "session_id": session.session_id,
        "accepted": avatar is not None,
        "avatar": session.avatar.model_dump() if session.avatar else None
    })


@router.delete("/avatar/{session_id}")
async def clear_avatar(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager)
):
    """Remove the avatar image"""
    session = _load_session(manager, session_id)
    session.clear_avatar()
    return success_response({"session_id": session.session_id, "avatar": None})


@router.get("/history/{session_id}")
async def get_history(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager)
):
    """Session state and message log"""
    session = _load_session(manager, session_id)
    return success_response(session.snapshot())


@router.post("/end")
async def end_chat(
    request: ChatEndRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """End a session and release its handles"""
    _load_session(manager, request.session_id)
    session = manager.end_session(request.session_id)

    return success_response({
        "session_id": session.session_id,
        "message_count": len(session.messages)
    }, message="Session ended")
