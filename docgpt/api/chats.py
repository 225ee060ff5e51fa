"""
Chat API endpoints
Chat CRUD plus request/response access to the conversation service
"""

import logging
from fastapi import APIRouter, Depends, status
from uuid import UUID

from docgpt.api.deps import get_chat_repository, get_conversation_service
from docgpt.repositories.chat_repository import ChatRepository
from docgpt.schemas.chat import ChatResponse, ChatUpdate, QueryRequest, SummaryRequest
from docgpt.services.conversation_service import ConversationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: UUID,
    chats: ChatRepository = Depends(get_chat_repository)
):
    """Chat with messages in chronological order"""
    return ChatResponse.from_chat(chats.get_chat(chat_id))


@router.patch("/{chat_id}", response_model=ChatResponse)
async def update_chat(
    chat_id: UUID,
    payload: ChatUpdate,
    chats: ChatRepository = Depends(get_chat_repository)
):
    """
    Update chat name and/or settings

    Only the fields present in the body are changed.
    """
    return ChatResponse.from_chat(chats.update_chat_settings(chat_id, payload))


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat(
    chat_id: UUID,
    chats: ChatRepository = Depends(get_chat_repository)
):
    """Delete a chat and all its messages"""
    chats.delete_chat(chat_id)
    return None


@router.post("/{chat_id}/query", response_model=ChatResponse)
async def query_chat(
    chat_id: UUID,
    request: QueryRequest,
    service: ConversationService = Depends(get_conversation_service)
):
    """Same as the 'conversation-query' socket event, over HTTP"""
    return ChatResponse.from_chat(await service.conversation_query(chat_id, request.query))


@router.post("/{chat_id}/summaries", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def summarize_document(
    chat_id: UUID,
    request: SummaryRequest,
    service: ConversationService = Depends(get_conversation_service)
):
    """Summarize a project document into the chat's context"""
    return ChatResponse.from_chat(await service.summarize_document(chat_id, request.document_id))
