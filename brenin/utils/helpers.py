"""
Utility functions
"""
import uuid


def generate_session_id() -> str:
    """
    Generate a session ID (with the sess_ prefix)

    Returns:
        session ID string
    """
    return f"sess_{uuid.uuid4().hex[:12]}"


def generate_message_id() -> str:
    """
    Generate a message ID (with the msg_ prefix)

    Returns:
        message ID string
    """
    return f"msg_{uuid.uuid4().hex}"


def generate_object_url() -> str:
    """Generate an ephemeral blob: handle for a selected file"""
    return f"blob:brenin/{uuid.uuid4()}"


def describe_file_kind(mime_type: str) -> str:
    """
    Plain-language kind of a file from its MIME type

    Args:
        mime_type: MIME type ("unknown" when the browser gave none)

    Returns:
        one of image, PDF document, text file, document, file
    """
    mime_type = (mime_type or "").lower()
    if mime_type.startswith("image/"):
        return "image"
    if "pdf" in mime_type:
        return "PDF document"
    if "text" in mime_type:
        return "text file"
    if "document" in mime_type:
        return "document"
    return "file"
