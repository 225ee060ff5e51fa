"""
Unit tests for ConversationService

Tests:
- Conversation queries persist user then llm message
- Memory replays earlier transcript, not the pending query
- Prompt language and model come from chat settings
- qa chats store retrieved excerpts as sources
- Unknown chats fail before any write
- Document summaries
"""

import pytest
from uuid import uuid4
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from docgpt.core.exceptions import NotFoundError
from docgpt.models import ChatMessage
from docgpt.schemas.chat import ChatUpdate
from docgpt.services.conversation_service import ConversationService


@pytest.fixture
def service(db_session, llm_factory):
    return ConversationService(db_session, llm_factory=llm_factory)


@pytest.mark.unit
@pytest.mark.asyncio
class TestConversationQuery:

    async def test_query_appends_user_and_llm_messages(self, service, conversation_chat):
        chat = await service.conversation_query(conversation_chat.id, "Bonjour ?")

        assert [(m.origin, m.content) for m in chat.messages] == [
            ("user", "Bonjour ?"),
            ("llm", "First answer"),
        ]

    async def test_model_from_chat_settings(self, service, llm_factory, conversation_chat, qa_chat):
        await service.conversation_query(conversation_chat.id, "hello")
        await service.conversation_query(qa_chat.id, "hello")

        assert llm_factory.requested == ["gpt-3.5-turbo", "gpt-4"]

    async def test_prompt_in_chat_language(self, service, fake_llm, chat_repository, conversation_chat):
        await service.conversation_query(conversation_chat.id, "question")
        chat_repository.update_chat_settings(
            conversation_chat.id, ChatUpdate.model_validate({"settings": {"language": "en"}})
        )
        await service.conversation_query(conversation_chat.id, "question")

        first_system, second_system = fake_llm.received[0][0], fake_llm.received[1][0]
        assert isinstance(first_system, SystemMessage)
        assert "français" in first_system.content
        assert "English" in second_system.content

    async def test_memory_replays_transcript(self, service, fake_llm, conversation_chat):
        await service.conversation_query(conversation_chat.id, "first question")
        chat = await service.conversation_query(conversation_chat.id, "second question")

        sent = fake_llm.received[1]
        assert isinstance(sent[1], HumanMessage) and sent[1].content == "first question"
        assert isinstance(sent[2], AIMessage) and sent[2].content == "First answer"
        assert isinstance(sent[3], HumanMessage) and sent[3].content == "second question"
        assert len(sent) == 4

        # Stored transcript matches what the model was given plus its answer
        assert [m.content for m in chat.messages] == [
            "first question", "First answer", "second question", "Second answer"
        ]

    async def test_first_query_has_empty_history(self, service, fake_llm, conversation_chat):
        await service.conversation_query(conversation_chat.id, "only question")

        sent = fake_llm.received[0]
        assert len(sent) == 2
        assert sent[1].content == "only question"

    async def test_unknown_chat_fails_without_writes(self, service, db_session, fake_llm):
        with pytest.raises(NotFoundError):
            await service.conversation_query(uuid4(), "hello")

        assert db_session.query(ChatMessage).count() == 0
        assert fake_llm.received == []

    async def test_llm_failure_keeps_user_message(self, db_session, conversation_chat):
        """The user message is persisted before the model is called"""
        def failing_factory(model):
            raise RuntimeError("provider down")

        service = ConversationService(db_session, llm_factory=failing_factory)

        with pytest.raises(RuntimeError):
            await service.conversation_query(conversation_chat.id, "hello")

        messages = db_session.query(ChatMessage).all()
        assert [(m.origin, m.content) for m in messages] == [("user", "hello")]


@pytest.mark.unit
@pytest.mark.asyncio
class TestQaQuery:

    async def test_sources_persisted(self, service, fake_llm, qa_chat, test_documents):
        chat = await service.conversation_query(qa_chat.id, "When are invoices generated?")

        answer = chat.messages[-1]
        assert answer.origin == "llm"
        assert answer.content == "First answer"
        readme = next(s for s in answer.sources if s.source == "docs/README.md")
        assert readme.original_document_id == test_documents[0].id
        assert readme.line_from == 1
        assert readme.line_to == 4

        # Excerpts were part of the prompt
        assert "Invoices are generated" in fake_llm.received[0][0].content

    async def test_no_documents_still_answers(self, service, qa_chat):
        chat = await service.conversation_query(qa_chat.id, "anything relevant?")

        assert chat.messages[-1].content == "First answer"
        assert chat.messages[-1].sources == []

    async def test_custom_retriever(self, db_session, llm_factory, qa_chat, test_documents):
        from langchain_core.documents import Document
        from langchain_core.runnables import RunnableLambda

        def retriever_factory(project_id):
            return RunnableLambda(lambda query: [
                Document(
                    page_content="timezone = Europe/Paris",
                    metadata={"source": "config/billing.toml", "loc": {"lines": {"from": 3, "to": 3}}},
                )
            ])

        service = ConversationService(db_session, llm_factory=llm_factory, retriever_factory=retriever_factory)

        chat = await service.conversation_query(qa_chat.id, "Which timezone?")

        source = chat.messages[-1].sources[0]
        assert source.source == "config/billing.toml"
        assert (source.line_from, source.line_to) == (3, 3)


@pytest.mark.unit
@pytest.mark.asyncio
class TestSummarizeDocument:

    async def test_summary_stored(self, service, fake_llm, conversation_chat, test_documents):
        chat = await service.summarize_document(conversation_chat.id, test_documents[0].id)

        assert len(chat.summaries) == 1
        assert chat.summaries[0].content == "First answer"
        assert chat.summaries[0].document_id == test_documents[0].id
        assert "The billing service computes monthly invoices." in fake_llm.received[0][1].content

    async def test_summary_feeds_later_prompts(self, service, fake_llm, conversation_chat, test_documents):
        await service.summarize_document(conversation_chat.id, test_documents[0].id)
        await service.conversation_query(conversation_chat.id, "question")

        system = fake_llm.received[1][0].content
        assert "docs/README.md" in system
        assert "First answer" in system

    async def test_unknown_document(self, service, conversation_chat):
        with pytest.raises(NotFoundError):
            await service.summarize_document(conversation_chat.id, uuid4())
