"""
ChatMessage Model - Individual messages in conversations
Stores user queries and LLM answers with their source excerpts
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from datetime import datetime, timezone
import uuid

from docgpt.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(Base):
    """
    Chat message model - individual message in a chat

    Attributes:
        id: Message UUID
        chat_id: Parent chat
        content: Message text
        origin: Message origin ('user' or 'llm')
        position: 1-based insertion index within the chat, orders the transcript
        created_at: Message timestamp
        updated_at: Last update time

    Relationships:
        chat: Parent chat (many-to-one)
        sources: Source excerpts backing an LLM answer (one-to-many)

    Cascade Delete:
        - Deleting chat deletes all messages
        - Deleting message deletes its source excerpts
    """

    __tablename__ = "chat_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    chat_id = Column(Uuid, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    origin = Column(String(16), nullable=False)  # user, llm
    position = Column(Integer, nullable=False)

    # Set client side: server clocks on SQLite only resolve to the second
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    chat = relationship("Chat", back_populates="messages")
    sources = relationship(
        "SourceDocument",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="SourceDocument.line_from"
    )

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, origin={self.origin}, chat_id={self.chat_id})>"
