"""
OriginalDocument Model - Source file of a project
"""

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from docgpt.database import Base


class OriginalDocument(Base):
    """
    Original document model - a project file referenced by path

    Attributes:
        id: Document UUID
        project_id: Owning project
        path: File path, as reported in retrieval metadata 'source'
        content: Full text used for retrieval and summarization
        created_at: Creation timestamp

    Uniqueness:
        - (project_id, path) is unique
    """

    __tablename__ = "original_documents"
    __table_args__ = (
        UniqueConstraint('project_id', 'path', name='uq_project_document_path'),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    path = Column(String(1024), nullable=False)
    content = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    project = relationship("Project", back_populates="documents")

    def __repr__(self):
        return f"<OriginalDocument(id={self.id}, path={self.path})>"
