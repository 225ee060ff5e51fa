"""
FastAPI dependencies
Database session, repositories and services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from docgpt.database import get_db
from docgpt.repositories.chat_repository import ChatRepository
from docgpt.repositories.project_repository import ProjectRepository
from docgpt.services.conversation_service import ConversationService, LlmFactory
from docgpt.services.llm import create_chat_llm


def get_chat_repository(db: Session = Depends(get_db)) -> ChatRepository:
    return ChatRepository(db)


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


def get_llm_factory() -> LlmFactory:
    """Factory building the chat model for a model identifier"""
    return create_chat_llm


def get_conversation_service(
    db: Session = Depends(get_db),
    llm_factory: LlmFactory = Depends(get_llm_factory),
) -> ConversationService:
    return ConversationService(db, llm_factory=llm_factory)
