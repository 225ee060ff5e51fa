"""
Chat Repository - Persistence of chats, messages, settings and provenance

Every lookup of a chat, project or document that does not exist raises
NotFoundError; nothing is retried.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from docgpt.core.exceptions import NotFoundError
from docgpt.models.chat import Chat
from docgpt.models.chat_message import ChatMessage
from docgpt.models.chat_settings import ChatSettings
from docgpt.models.source_document import SourceDocument
from docgpt.models.summary import Summary
from docgpt.repositories.project_repository import ProjectRepository
from docgpt.schemas.chat import ChatCreate, ChatUpdate, LlmAnswer, LlmModel, MessageOrigin

logger = logging.getLogger(__name__)


class ChatRepository:
    """
    CRUD over Chat, ChatMessage, ChatSettings, Summary and SourceDocument

    Writes commit immediately; a failed write is rolled back before the
    error propagates so the session stays usable.
    """

    def __init__(self, db: Session):
        self.db = db
        self.projects = ProjectRepository(db)

    def _transcript_query(self):
        """Chat query loading everything a serialized transcript needs"""
        return self.db.query(Chat).options(
            selectinload(Chat.settings),
            selectinload(Chat.messages).selectinload(ChatMessage.sources),
            selectinload(Chat.summaries).selectinload(Summary.document),
        )

    def _get_chat_row(self, chat_id: UUID) -> Chat:
        chat = self.db.query(Chat).filter(Chat.id == chat_id).first()
        if not chat:
            raise NotFoundError("chat", chat_id)
        return chat

    def get_chats_by_project_id(
        self,
        project_id: UUID,
        with_messages: bool = False,
        with_summaries: bool = False
    ) -> List[Chat]:
        """
        List chats of a project

        Args:
            project_id: Project UUID
            with_messages: Eager-load ordered messages
            with_summaries: Eager-load summaries

        Returns:
            Chats with settings always loaded
        """
        options = [selectinload(Chat.settings)]
        if with_messages:
            options.append(selectinload(Chat.messages).selectinload(ChatMessage.sources))
        if with_summaries:
            options.append(selectinload(Chat.summaries))

        return self.db.query(Chat).options(*options).filter(
            Chat.project_id == project_id
        ).order_by(Chat.created_at).all()

    def get_chat(self, chat_id: UUID) -> Chat:
        """Chat with messages (oldest first), their sources, settings and summaries"""
        chat = self._transcript_query().filter(Chat.id == chat_id).first()
        if not chat:
            raise NotFoundError("chat", chat_id)
        return chat

    def get_chat_model(self, chat_id: UUID) -> LlmModel:
        chat = self.db.query(Chat).options(selectinload(Chat.settings)).filter(Chat.id == chat_id).first()
        if not chat:
            raise NotFoundError("chat", chat_id)
        return LlmModel(chat.settings.model)

    def create_chat(self, project_id: UUID, payload: ChatCreate) -> Chat:
        """
        Create a chat together with its settings

        Raises:
            NotFoundError: project does not exist
        """
        project = self.projects.get_project(project_id)

        settings = ChatSettings(
            language=payload.settings.language.value,
            model=payload.settings.model.value,
            type=payload.settings.type.value,
        )
        chat = Chat(name=payload.name, project_id=project.id, settings=settings)
        self.db.add(chat)
        self.db.commit()

        logger.info(f"Created chat {chat.id} in project {project.id}")
        return self.get_chat(chat.id)

    def update_chat_settings(self, chat_id: UUID, payload: ChatUpdate) -> Chat:
        """
        Update chat name and/or settings

        Only fields explicitly present in the payload are written.
        """
        chat = self.db.query(Chat).options(selectinload(Chat.settings)).filter(Chat.id == chat_id).first()
        if not chat:
            raise NotFoundError("chat", chat_id)

        if payload.name:
            chat.name = payload.name

        if payload.settings is not None:
            update_data = payload.settings.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None:
                    continue
                setattr(chat.settings, field, value.value)

        self.db.commit()
        return self.get_chat(chat_id)

    def add_message_to_chat(self, chat_id: UUID, content: str, origin: str) -> Chat:
        """
        Append one message to a chat

        Returns:
            Refreshed chat with messages ordered by creation time
        """
        chat = self._get_chat_row(chat_id)

        message = ChatMessage(
            chat_id=chat.id,
            content=content,
            origin=MessageOrigin(origin).value,
            position=self._next_position(chat.id),
        )
        self.db.add(message)
        self.db.commit()

        logger.debug(f"Added {message.origin} message {message.id} to chat {chat.id}")
        return self._refreshed(chat)

    def add_summary_to_chat(self, project_id: UUID, chat_id: UUID, document_id: UUID, content: str) -> Chat:
        """
        Persist a summary of a project document as chat context

        Raises:
            NotFoundError: chat missing, chat outside the project, or
                document missing from the project
        """
        chat = self._get_chat_in_project(project_id, chat_id)
        document = self.projects.get_original_document(project_id, document_id=document_id)

        self.db.add(Summary(chat_id=chat.id, document_id=document.id, content=content))
        self.db.commit()

        logger.info(f"Added summary of {document.path} to chat {chat.id}")
        return self._refreshed(chat)

    def add_message_with_sources_to_chat(self, project_id: UUID, chat_id: UUID, message: LlmAnswer) -> Chat:
        """
        Append an LLM answer and the excerpts it cites

        Every excerpt must point to an original document of the chat's
        project. If one does not, nothing is written.

        Raises:
            NotFoundError: chat missing, chat outside the project, or an
                excerpt source not found in the project
        """
        chat = self._get_chat_in_project(project_id, chat_id)

        # Resolve every source before writing anything
        resolved = []
        for excerpt in message.source_documents:
            document = self.projects.get_original_document(project_id, path=excerpt.metadata.source)
            resolved.append((excerpt, document))

        try:
            new_message = ChatMessage(
                chat_id=chat.id,
                content=message.text,
                origin=MessageOrigin.LLM.value,
                position=self._next_position(chat.id),
            )
            self.db.add(new_message)
            self.db.flush()

            for excerpt, document in resolved:
                lines = excerpt.metadata.loc.lines if excerpt.metadata.loc else None
                self.db.add(SourceDocument(
                    message_id=new_message.id,
                    original_document_id=document.id,
                    source=excerpt.metadata.source,
                    page_content=excerpt.page_content,
                    line_from=lines.from_ if lines else None,
                    line_to=lines.to if lines else None,
                ))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.debug(f"Added llm message {new_message.id} with {len(resolved)} sources to chat {chat.id}")
        return self._refreshed(chat)

    def delete_chat(self, chat_id: UUID) -> None:
        """Delete a chat with its settings, messages, sources and summaries"""
        chat = self._get_chat_row(chat_id)
        self.db.delete(chat)
        self.db.commit()
        logger.info(f"Deleted chat {chat_id}")

    def _get_chat_in_project(self, project_id: UUID, chat_id: UUID) -> Chat:
        chat = self.db.query(Chat).filter(
            Chat.id == chat_id,
            Chat.project_id == project_id
        ).first()
        if not chat:
            raise NotFoundError("chat", chat_id)
        return chat

    def _next_position(self, chat_id: UUID) -> int:
        last = self.db.query(func.max(ChatMessage.position)).filter(ChatMessage.chat_id == chat_id).scalar()
        return (last or 0) + 1

    def _refreshed(self, chat: Chat) -> Chat:
        """Reload a chat so relationships reflect the rows just written"""
        self.db.expire(chat)
        return self.get_chat(chat.id)
