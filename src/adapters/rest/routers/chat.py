"""Chat endpoints: run a turn, read the transcript."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from domain.exceptions import DomainError, InvalidRequest, SessionBusy
from application.services.chat_session import ChatSessionService
from adapters.rest.dependencies import get_chat_service
from adapters.rest.schemas import ChatBody, ChatOut, ErrorOut, HistoryOut, MessageOut

router = APIRouter(prefix="/api/chat", tags=["chat"])
logger = logging.getLogger(__name__)

MESSAGE_REQUIRED = "Message is required"
SESSION_BUSY = "Session is busy"
INTERNAL_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "",
    response_model=ChatOut,
    responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def chat(
    body: ChatBody,
    service: ChatSessionService = Depends(get_chat_service),
):
    """Send one user message to the agent and return its reply.

    Failure detail is logged by the session service and never returned.
    """
    try:
        result = await service.handle_turn(body.message)
    except InvalidRequest:
        return error_response(status.HTTP_400_BAD_REQUEST, MESSAGE_REQUIRED)
    except SessionBusy:
        return error_response(status.HTTP_409_CONFLICT, SESSION_BUSY)
    except DomainError:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
    except Exception:
        logger.exception("Unhandled error processing chat")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
    return ChatOut(response=result.text)


@router.get("/history", response_model=HistoryOut)
async def history(service: ChatSessionService = Depends(get_chat_service)):
    """Return the full session transcript, oldest first."""
    return HistoryOut(
        session_id=service.session_id,
        messages=[
            MessageOut(role=m.role.value, content=m.content, tool_name=m.tool_name)
            for m in service.history()
        ],
    )
