"""
Persistence layer

Repositories:
    - ChatRepository: chats, messages, settings, summaries, source excerpts
    - ProjectRepository: projects and original documents
"""

from docgpt.repositories.chat_repository import ChatRepository
from docgpt.repositories.project_repository import ProjectRepository

__all__ = ["ChatRepository", "ProjectRepository"]
