"""
Completion endpoint router (server side of the completion call)
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional
from brenin.services.deepseek_client import DeepSeekClient, deepseek_client
from brenin.services.response_resolver import APOLOGY_MESSAGE
from brenin.utils.exceptions import CompletionAPIError
from brenin.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["completion"])


class CompletionRequest(BaseModel):
    message: str
    context: Optional[str] = None


def get_deepseek_client() -> DeepSeekClient:
    return deepseek_client


@router.post("/deepseek")
def complete(
    request: CompletionRequest,
    client: DeepSeekClient = Depends(get_deepseek_client)
):
    """Forward one utterance to DeepSeek and return {"response": text}"""
    if not client.configured:
        logger.error("DeepSeek API key not found")
        return JSONResponse(status_code=500, content={"error": "DeepSeek API key not configured"})

    try:
        reply = client.reply(request.message, request.context)
    except CompletionAPIError as e:
        logger.error(f"DeepSeek API error: {e.status_code} {str(e)}")
        return JSONResponse(
            status_code=e.status_code or 502,
            content={"error": "Failed to get response from DeepSeek"}
        )

    return {"response": reply or APOLOGY_MESSAGE}
