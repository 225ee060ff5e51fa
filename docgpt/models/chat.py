"""
Chat Model - Persisted conversation thread
"""

from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from docgpt.database import Base


class Chat(Base):
    """
    Chat model - conversation container

    Attributes:
        id: Chat UUID
        project_id: Owning project
        settings_id: One-to-one settings row
        name: Chat name
        created_at: Creation timestamp
        updated_at: Last update time

    Relationships:
        project: Owning project (many-to-one)
        settings: Chat settings (one-to-one, deleted with the chat)
        messages: Chat messages in insertion order (one-to-many)
        summaries: Document summaries used as chat context (one-to-many)

    Cascade Delete:
        - Deleting a project deletes all its chats
        - Deleting a chat deletes its settings, messages and summaries
    """

    __tablename__ = "chats"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    settings_id = Column(Uuid, ForeignKey("chat_settings.id"), nullable=False, unique=True)

    name = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    project = relationship("Project", back_populates="chats")
    settings = relationship(
        "ChatSettings",
        back_populates="chat",
        cascade="all, delete-orphan",
        single_parent=True,
    )
    messages = relationship(
        "ChatMessage",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="ChatMessage.position"
    )
    summaries = relationship(
        "Summary",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="Summary.created_at"
    )

    def __repr__(self):
        return f"<Chat(id={self.id}, project_id={self.project_id}, name={self.name})>"
