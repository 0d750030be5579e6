"""Chat completion endpoint.

Receives the whole conversation and answers with the next assistant
turn. Success and failure bodies share the ``{"content": ...}`` shape
so the UI can report errors without knowing FastAPI's error format.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from chatgame.llm.service import (
    CompletionService,
    CompletionServiceError,
    get_completion_service,
)
from chatgame.models.schemas import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["completion"])


@router.post(
    "/chat-complete",
    response_model=CompletionResponse,
    responses={status.HTTP_502_BAD_GATEWAY: {"model": CompletionResponse}},
)
async def chat_complete(
    request: CompletionRequest,
    service: CompletionService = Depends(get_completion_service),
) -> CompletionResponse | JSONResponse:
    """Generate the next assistant message for a conversation.

    Args:
        request: Conversation history, oldest first.
        service: Completion service (overridable in tests).

    Returns:
        CompletionResponse with the assistant reply.

    Raises:
        422: Malformed request body.
        502: The model provider failed.
    """
    logger.info(f"Completion requested for {len(request.messages)} messages")

    try:
        content = await service.complete(request.messages)
    except CompletionServiceError as e:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=CompletionResponse(content=str(e)).model_dump(),
        )

    return CompletionResponse(content=content)
