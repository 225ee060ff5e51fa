"""
Chat Memory - Conversation memory scoped to one persisted chat

The stored transcript is the memory: it is rebuilt from the database on
every query, so what the model sees is exactly what was persisted.
"""

import logging
from typing import List, Dict, Any, Optional, Sequence
from uuid import UUID

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from docgpt.config import settings
from docgpt.models.chat import Chat
from docgpt.models.chat_message import ChatMessage
from docgpt.models.summary import Summary
from docgpt.schemas.chat import MessageOrigin

logger = logging.getLogger(__name__)


class ChatMemory:
    """
    Memory of one chat, in the shape LangChain prompts expect

    Attributes:
        chat_id: Chat the memory belongs to
        messages: Last `window` transcript messages as LangChain messages
        summaries: Chat summaries as {"path", "content"} dicts
    """

    memory_key = "history"

    def __init__(
        self,
        chat_id: UUID,
        messages: Sequence[ChatMessage],
        summaries: Sequence[Summary] = (),
        window: Optional[int] = None,
    ):
        self.chat_id = chat_id
        self.window = window if window is not None else settings.MEMORY_WINDOW
        recent = list(messages)[-self.window:] if self.window > 0 else []
        self.messages: List[BaseMessage] = [self._to_langchain(m) for m in recent]
        self.summaries: List[Dict[str, Any]] = [
            {"path": s.document.path if s.document else str(s.document_id), "content": s.content}
            for s in summaries
        ]

    @classmethod
    def from_chat(cls, chat: Chat, exclude_last: bool = False, window: Optional[int] = None) -> "ChatMemory":
        """
        Build memory from a loaded chat

        Args:
            chat: Chat with messages and summaries
            exclude_last: Leave out the newest message (the query being answered)
            window: Number of past messages to keep
        """
        messages = list(chat.messages)
        if exclude_last and messages:
            messages = messages[:-1]
        memory = cls(chat.id, messages, chat.summaries, window=window)
        logger.debug(f"Memory for chat {chat.id}: {len(memory.messages)} messages, {len(memory.summaries)} summaries")
        return memory

    def load_memory_variables(self) -> Dict[str, Any]:
        return {self.memory_key: list(self.messages)}

    @staticmethod
    def _to_langchain(message: ChatMessage) -> BaseMessage:
        if message.origin == MessageOrigin.USER.value:
            return HumanMessage(content=message.content)
        return AIMessage(content=message.content)

    def __len__(self):
        return len(self.messages)
