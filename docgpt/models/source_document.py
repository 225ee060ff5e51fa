"""
SourceDocument Model - Excerpt of an original document cited by an LLM answer
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid

from docgpt.database import Base


class SourceDocument(Base):
    """
    Source document model - provenance of a retrieval-augmented answer

    Attributes:
        id: Excerpt UUID
        message_id: LLM message citing this excerpt
        original_document_id: Document the excerpt comes from
        source: Document path as returned by the retriever
        page_content: Excerpt text
        line_from: First line of the excerpt (1-based, inclusive)
        line_to: Last line of the excerpt (inclusive)
    """

    __tablename__ = "source_documents"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    message_id = Column(Uuid, ForeignKey("chat_messages.id", ondelete="CASCADE"), nullable=False, index=True)
    original_document_id = Column(
        Uuid, ForeignKey("original_documents.id", ondelete="CASCADE"), nullable=False, index=True
    )

    source = Column(String(1024), nullable=False)
    page_content = Column(Text, nullable=False)
    line_from = Column(Integer)
    line_to = Column(Integer)

    # Relationships
    message = relationship("ChatMessage", back_populates="sources")
    original_document = relationship("OriginalDocument")

    def __repr__(self):
        return f"<SourceDocument(id={self.id}, source={self.source}, lines={self.line_from}-{self.line_to})>"
