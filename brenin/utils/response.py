"""
Common API response envelope
"""
from typing import Any, Optional, Dict
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail carried in the envelope"""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a success envelope

    Args:
        data: response payload
        message: optional human readable message

    Returns:
        envelope dict
    """
    response = {
        "success": True,
        "data": data,
        "error": None
    }

    if message:
        response["message"] = message

    return response


def error_response(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build an error envelope

    Args:
        code: error code
        message: error message
        details: extra details

    Returns:
        envelope dict
    """
    return {
        "success": False,
        "data": None,
        "error": ErrorDetail(code=code, message=message, details=details).model_dump()
    }
