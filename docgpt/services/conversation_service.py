"""
Conversation Service - Maps a persisted chat to an LLM conversation

A query is answered in a single pass:
    persist user message -> build memory -> build prompt -> call chain
    -> persist answer (with sources for qa chats) -> return transcript

There is no retry and no per-chat locking: two queries on the same chat
processed at the same time may interleave their writes.
"""

import logging
from typing import Callable, List, Dict, Any, Optional
from uuid import UUID

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.retrievers import BaseRetriever
from sqlalchemy.orm import Session

from docgpt.config import settings
from docgpt.models.chat import Chat
from docgpt.prompts import PromptBuilder
from docgpt.repositories.chat_repository import ChatRepository
from docgpt.repositories.project_repository import ProjectRepository
from docgpt.schemas.chat import (
    ChatType,
    Language,
    LlmAnswer,
    LlmModel,
    MessageOrigin,
    RetrievedExcerpt,
)
from docgpt.search.project_retriever import ProjectRetriever
from docgpt.services.chains import ConversationChain
from docgpt.services.llm import create_chat_llm
from docgpt.services.memory import ChatMemory

logger = logging.getLogger(__name__)

LlmFactory = Callable[[str], BaseChatModel]
RetrieverFactory = Callable[[UUID], BaseRetriever]


class ConversationService:
    """
    Conversation orchestration for persisted chats

    Key features:
    - Memory built from the stored transcript of the chat
    - Prompt in the chat's language, tuned for the chat's model
    - Retrieval-augmented answers with stored provenance for qa chats
    - Document summaries kept as chat context
    """

    def __init__(
        self,
        db: Session,
        llm_factory: Optional[LlmFactory] = None,
        retriever_factory: Optional[RetrieverFactory] = None,
    ):
        """
        Initialize conversation service

        Args:
            db: Database session
            llm_factory: Builds a chat model from a model identifier
            retriever_factory: Builds a retriever for a project id
        """
        self.db = db
        self.chats = ChatRepository(db)
        self.projects = ProjectRepository(db)
        self.prompt_builder = PromptBuilder()
        self.llm_factory = llm_factory or create_chat_llm
        self.retriever_factory = retriever_factory or self._project_retriever

    def _project_retriever(self, project_id: UUID) -> BaseRetriever:
        return ProjectRetriever.from_original_documents(
            self.projects.list_original_documents(project_id)
        )

    async def conversation_query(self, chat_id: UUID, query: str) -> Chat:
        """
        Answer a user query in a chat

        Args:
            chat_id: Chat UUID
            query: User query

        Returns:
            Chat transcript including the query and the answer

        Raises:
            NotFoundError: chat (or a cited document) does not exist
        """
        # Fails before anything is written when the chat is unknown
        chat = self.chats.get_chat(chat_id)
        language = Language(chat.settings.language)
        model = LlmModel(chat.settings.model)
        chat_type = ChatType(chat.settings.type)
        project_id = chat.project_id

        logger.info(f"Query on chat {chat_id} (type={chat_type.value}, model={model.value}, language={language.value})")

        chat = self.chats.add_message_to_chat(chat_id, query, MessageOrigin.USER.value)
        memory = ChatMemory.from_chat(chat, exclude_last=True)
        llm = self.llm_factory(model.value)

        if chat_type == ChatType.QA:
            answer = await self._answer_with_sources(project_id, query, memory, llm, language, model)
            return self.chats.add_message_with_sources_to_chat(project_id, chat_id, answer)

        prompt = self.prompt_builder.build_conversation_prompt(language, model, memory.summaries)
        chain = ConversationChain(llm=llm, prompt=prompt, memory=memory)
        resp = await chain.ainvoke({"input": query})

        return self.chats.add_message_to_chat(chat_id, resp["response"], MessageOrigin.LLM.value)

    async def _answer_with_sources(
        self,
        project_id: UUID,
        query: str,
        memory: ChatMemory,
        llm: BaseChatModel,
        language: Language,
        model: LlmModel,
    ) -> LlmAnswer:
        """Retrieve excerpts, answer from them and keep them as sources"""
        retriever = self.retriever_factory(project_id)
        documents: List[Document] = await retriever.ainvoke(query)
        excerpts = [
            RetrievedExcerpt(page_content=d.page_content, metadata=d.metadata)
            for d in documents
        ]
        logger.info(f"Retrieved {len(excerpts)} excerpts for project {project_id}")

        prompt = self.prompt_builder.build_qa_prompt(
            language, model, memory.summaries, self._excerpt_context(excerpts)
        )
        chain = ConversationChain(llm=llm, prompt=prompt, memory=memory)
        resp = await chain.ainvoke({"input": query})

        return LlmAnswer(text=resp["response"], source_documents=excerpts)

    @staticmethod
    def _excerpt_context(excerpts: List[RetrievedExcerpt]) -> List[Dict[str, Any]]:
        context = []
        for excerpt in excerpts:
            lines = excerpt.metadata.loc.lines if excerpt.metadata.loc else None
            context.append({
                "source": excerpt.metadata.source,
                "line_from": lines.from_ if lines else "?",
                "line_to": lines.to if lines else "?",
                "content": excerpt.page_content,
            })
        return context

    async def summarize_document(self, chat_id: UUID, document_id: UUID) -> Chat:
        """
        Summarize a project document into the chat's context

        Args:
            chat_id: Chat UUID
            document_id: Original document of the chat's project

        Returns:
            Chat with the new summary

        Raises:
            NotFoundError: chat or document does not exist in the project
        """
        chat = self.chats.get_chat(chat_id)
        language = Language(chat.settings.language)
        model = LlmModel(chat.settings.model)
        project_id = chat.project_id

        document = self.projects.get_original_document(project_id, document_id=document_id)
        content = (document.content or "")[:settings.SUMMARY_MAX_CHARS].strip()

        logger.info(f"Summarizing {document.path} for chat {chat_id} ({len(content)} chars)")

        messages = self.prompt_builder.build_summary_messages(language, document.path, content)
        chain = self.llm_factory(model.value) | StrOutputParser()
        summary = await chain.ainvoke(messages)

        return self.chats.add_summary_to_chat(project_id, chat_id, document.id, summary.strip())
