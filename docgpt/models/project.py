"""
Project Model - Top-level container for chats and source documents
"""

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from docgpt.database import Base


class Project(Base):
    """
    Project model - owns chats and the documents they are grounded on

    Attributes:
        id: Project UUID
        name: Display name
        created_at: Creation timestamp

    Relationships:
        chats: Chats of this project (one-to-many, cascade delete)
        documents: Original documents (one-to-many, cascade delete)
    """

    __tablename__ = "projects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    chats = relationship("Chat", back_populates="project", cascade="all, delete-orphan")
    documents = relationship("OriginalDocument", back_populates="project", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name})>"
