"""
Pydantic Schemas for Project endpoints
"""

from pydantic import Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from docgpt.schemas.chat import CamelModel


class ProjectCreate(CamelModel):
    """Schema for creating a new project"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")


class ProjectResponse(CamelModel):
    id: UUID
    name: str
    created_at: Optional[datetime] = None


class OriginalDocumentCreate(CamelModel):
    """Schema for registering a project document"""
    path: str = Field(..., min_length=1, max_length=1024, description="Document path")
    content: str = Field(default="", description="Document text")


class OriginalDocumentResponse(CamelModel):
    id: UUID
    project_id: UUID
    path: str
    created_at: Optional[datetime] = None
