"""
Conversation socket
Socket.IO events served next to the REST API, compatible with socket.io-client

Client -> server:
    conversation-query     {"chatId": str, "query": str}
Server -> client (to the emitting client only):
    conversation-response  serialized chat with ordered messages
    conversation-error     error payload; the connection stays open
"""

import logging
import socketio
from pydantic import ValidationError

from docgpt.config import settings
from docgpt.database import SessionLocal
from docgpt.schemas.chat import ChatResponse, ConversationQuery
from docgpt.services.conversation_service import ConversationService
from docgpt.services.llm import create_chat_llm
from docgpt.utils.error_handlers import ErrorHandler

logger = logging.getLogger(__name__)

QUERY_EVENT = "conversation-query"
RESPONSE_EVENT = "conversation-response"
ERROR_EVENT = "conversation-error"

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=settings.CORS_ORIGINS,
    logger=False,
    engineio_logger=False,
)


@sio.event
async def connect(sid, environ, auth=None):
    logger.info(f"Socket client connected: {sid}")


@sio.event
async def disconnect(sid, *args):
    logger.info(f"Socket client disconnected: {sid}")


@sio.on(QUERY_EVENT)
async def conversation_query(sid, data):
    """
    Answer a query and emit the updated chat

    Each event gets its own database session. Invalid payloads and
    failures are reported with a 'conversation-error' event.
    """
    try:
        payload = ConversationQuery.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid {QUERY_EVENT} payload from {sid}: {e}")
        await sio.emit(ERROR_EVENT, {
            "error": "validation_error",
            "message": "Event validation failed.",
            "details": str(e)
        }, to=sid)
        return

    db = SessionLocal()
    try:
        service = ConversationService(db, llm_factory=create_chat_llm)
        chat = await service.conversation_query(payload.chat_id, payload.query)
        response = ChatResponse.from_chat(chat).model_dump(mode="json", by_alias=True)
    except Exception as e:
        db.rollback()
        await sio.emit(ERROR_EVENT, ErrorHandler.to_payload(e), to=sid)
        return
    finally:
        db.close()

    await sio.emit(RESPONSE_EVENT, response, to=sid)


@sio.on("*")
async def unknown_event(event, sid, data=None):
    logger.warning(f"Unsupported socket event '{event}' from {sid}")
    await sio.emit(ERROR_EVENT, {
        "error": "unknown_event",
        "message": f"Unsupported event '{event}'"
    }, to=sid)
