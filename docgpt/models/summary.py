"""
Summary Model - LLM condensation of a document, kept as chat context
"""

from sqlalchemy import Column, Text, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from docgpt.database import Base


class Summary(Base):
    """
    Summary model

    Attributes:
        id: Summary UUID
        chat_id: Chat the summary belongs to
        document_id: Summarized original document
        content: Summary text
        created_at: Creation timestamp
    """

    __tablename__ = "summaries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    chat_id = Column(Uuid, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)
    document_id = Column(Uuid, ForeignKey("original_documents.id", ondelete="CASCADE"), nullable=False)

    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    chat = relationship("Chat", back_populates="summaries")
    document = relationship("OriginalDocument")

    def __repr__(self):
        return f"<Summary(id={self.id}, chat_id={self.chat_id}, document_id={self.document_id})>"
