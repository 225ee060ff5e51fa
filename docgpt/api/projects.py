"""
Project API endpoints
Projects, their original documents and their chats
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID

from docgpt.api.deps import get_chat_repository, get_project_repository
from docgpt.repositories.chat_repository import ChatRepository
from docgpt.repositories.project_repository import ProjectRepository
from docgpt.schemas.chat import ChatCreate, ChatResponse
from docgpt.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    OriginalDocumentCreate,
    OriginalDocumentResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    projects: ProjectRepository = Depends(get_project_repository)
):
    """Create a new project"""
    return ProjectResponse.model_validate(projects.create_project(project.name))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    projects: ProjectRepository = Depends(get_project_repository)
):
    return ProjectResponse.model_validate(projects.get_project(project_id))


@router.post(
    "/{project_id}/documents",
    response_model=OriginalDocumentResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_document(
    project_id: UUID,
    document: OriginalDocumentCreate,
    projects: ProjectRepository = Depends(get_project_repository)
):
    """
    Register a source document of a project

    Raises:
        HTTPException: 404 if project not found
        HTTPException: 409 if a document already exists at this path
    """
    created = projects.add_original_document(project_id, document.path, document.content)
    return OriginalDocumentResponse.model_validate(created)


@router.get("/{project_id}/documents", response_model=List[OriginalDocumentResponse])
async def list_documents(
    project_id: UUID,
    projects: ProjectRepository = Depends(get_project_repository)
):
    return [OriginalDocumentResponse.model_validate(d) for d in projects.list_original_documents(project_id)]


@router.get("/{project_id}/chats", response_model=List[ChatResponse])
async def list_chats(
    project_id: UUID,
    messages: bool = False,
    summaries: bool = False,
    chats: ChatRepository = Depends(get_chat_repository)
):
    """
    List chats of a project

    Args:
        project_id: Project UUID
        messages: Include ordered messages
        summaries: Include summaries
    """
    rows = chats.get_chats_by_project_id(project_id, with_messages=messages, with_summaries=summaries)
    return [ChatResponse.from_chat(c, messages=messages, summaries=summaries) for c in rows]


@router.post("/{project_id}/chats", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    project_id: UUID,
    payload: ChatCreate,
    chats: ChatRepository = Depends(get_chat_repository)
):
    """
    Create a chat with its settings

    Raises:
        HTTPException: 404 if project not found
    """
    return ChatResponse.from_chat(chats.create_chat(project_id, payload))
