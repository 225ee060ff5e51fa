"""
SQLAlchemy Database Models

All models use UUID as primary key.

Models:
    - Project: Container for chats and documents
    - Chat: Persisted conversation thread
    - ChatSettings: Language, model and type of a chat
    - ChatMessage: Individual messages in a chat
    - OriginalDocument: Project source files
    - SourceDocument: Excerpts cited by LLM answers
    - Summary: LLM condensation of a document

Relationships:
    Project 1:N Chat
    Project 1:N OriginalDocument
    Chat 1:1 ChatSettings
    Chat 1:N ChatMessage
    Chat 1:N Summary
    ChatMessage 1:N SourceDocument
    OriginalDocument 1:N SourceDocument

Cascade Deletes:
    - Delete Project → Delete all Chats and OriginalDocuments
    - Delete Chat → Delete ChatSettings, ChatMessages, Summaries
    - Delete ChatMessage → Delete its SourceDocuments
"""

from docgpt.models.project import Project
from docgpt.models.chat_settings import ChatSettings
from docgpt.models.chat import Chat
from docgpt.models.chat_message import ChatMessage
from docgpt.models.original_document import OriginalDocument
from docgpt.models.source_document import SourceDocument
from docgpt.models.summary import Summary

__all__ = ["Project", "ChatSettings", "Chat", "ChatMessage", "OriginalDocument", "SourceDocument", "Summary"]
