"""
Unit tests for ChatMemory
"""

import pytest
from uuid import uuid4
from unittest.mock import MagicMock
from langchain_core.messages import AIMessage, HumanMessage

from docgpt.services.memory import ChatMemory


def message(content, origin):
    msg = MagicMock()
    msg.content = content
    msg.origin = origin
    return msg


@pytest.mark.unit
class TestChatMemory:

    def test_origins_map_to_langchain_messages(self):
        memory = ChatMemory(uuid4(), [message("question", "user"), message("answer", "llm")], window=10)

        history = memory.load_memory_variables()["history"]
        assert isinstance(history[0], HumanMessage)
        assert isinstance(history[1], AIMessage)
        assert history[0].content == "question"
        assert history[1].content == "answer"

    def test_window_keeps_most_recent(self):
        messages = [message(f"Message {i}", "user") for i in range(6)]

        memory = ChatMemory(uuid4(), messages, window=3)

        assert [m.content for m in memory.messages] == ["Message 3", "Message 4", "Message 5"]

    def test_zero_window_is_empty(self):
        memory = ChatMemory(uuid4(), [message("question", "user")], window=0)
        assert len(memory) == 0

    def test_summaries_use_document_path(self):
        summary = MagicMock()
        summary.content = "About billing"
        summary.document.path = "docs/README.md"

        memory = ChatMemory(uuid4(), [], [summary], window=5)

        assert memory.summaries == [{"path": "docs/README.md", "content": "About billing"}]

    def test_from_chat_excludes_pending_query(self, chat_repository, conversation_chat):
        """The newest message is the query being answered and stays out of history"""
        chat_repository.add_message_to_chat(conversation_chat.id, "earlier question", "user")
        chat_repository.add_message_to_chat(conversation_chat.id, "earlier answer", "llm")
        chat = chat_repository.add_message_to_chat(conversation_chat.id, "new question", "user")

        memory = ChatMemory.from_chat(chat, exclude_last=True, window=10)

        assert memory.chat_id == conversation_chat.id
        assert [m.content for m in memory.messages] == ["earlier question", "earlier answer"]
