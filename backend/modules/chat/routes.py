"""
Chat API endpoint.

Gates each request through the access gatekeeper (which charges one
message when it allows the request), then streams the reply via SSE.
"""

import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from langchain_openai import ChatOpenAI
from sse_starlette.sse import EventSourceResponse

from api.middleware.auth import get_current_user
from api.dependencies import get_access_gatekeeper, get_chat_service
from api.models.errors import AccessDeniedResponse, ErrorResponse
from shared.models import AuthenticatedUser
from modules.gatekeeper.models import DenyReason
from modules.gatekeeper.service import AccessGatekeeper

from .models import ChatEventType, ChatMessage, ChatRequest
from .service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter()


async def event_generator(
    service: ChatService,
    llm: ChatOpenAI,
    messages: list[ChatMessage],
):
    """
    Generate SSE events for a chat reply.

    Yields events in the format:
        event: chunk | done | error
        data: <text chunk> | "" | {"error": "Failed to process chat request"}

    The message has already been charged; a failure mid-stream is reported
    as an error event and is not refunded. Exception text stays in the log;
    the client only gets a generic message.
    """
    try:
        async for text in service.stream_reply(llm, messages):
            yield {"event": ChatEventType.CHUNK.value, "data": text}
    except Exception:
        logger.exception("Chat stream failed")
        yield {
            "event": ChatEventType.ERROR.value,
            "data": json.dumps({"error": "Failed to process chat request"}),
        }
        return

    yield {"event": ChatEventType.DONE.value, "data": ""}


@router.post(
    "",
    responses={
        403: {"model": AccessDeniedResponse},
        404: {"model": AccessDeniedResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    gatekeeper: AccessGatekeeper = Depends(get_access_gatekeeper),
    service: ChatService = Depends(get_chat_service),
):
    """
    Send a conversation and stream the assistant's reply.

    Denials (403) carry the reason plus the context the client needs:
    - EMAIL_VERIFICATION_REQUIRED: messages_used, threshold
    - PLAN_LIMIT_REACHED: plan, messages_used, message_limit

    On success the SSE response carries the post-charge counters in the
    X-Usage-Messages-Used and X-Usage-Messages-Limit headers.
    """
    decision = await gatekeeper.check(user.id)

    if not decision.allowed:
        status_code = 404 if decision.reason == DenyReason.USER_NOT_FOUND else 403
        return JSONResponse(
            status_code=status_code,
            content=AccessDeniedResponse(
                error=decision.reason.value,
                **decision.context(),
            ).model_dump(exclude_none=True),
        )

    model = service.resolve_model(request.model_id)
    llm = service.get_llm(model)
    logger.info(
        f"Streaming {model.name} ({model.provider}) reply for {user.id}, "
        f"usage {decision.messages_used}/{decision.message_limit}"
    )

    return EventSourceResponse(
        event_generator(service, llm, request.messages),
        media_type="text/event-stream",
        headers={
            "X-Usage-Messages-Used": str(decision.messages_used),
            "X-Usage-Messages-Limit": str(decision.message_limit),
        },
    )
