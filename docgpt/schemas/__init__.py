"""
Pydantic Schemas for Request/Response Validation

Chat Schemas:
    - ChatCreate: POST /projects/{id}/chats
    - ChatUpdate: PATCH /chats/{id}
    - ChatResponse: Serialized chat with messages and summaries
    - ConversationQuery: 'conversation-query' socket payload
    - LlmAnswer: LLM text with retrieved excerpts

Project Schemas:
    - ProjectCreate, ProjectResponse
    - OriginalDocumentCreate, OriginalDocumentResponse
"""

from docgpt.schemas.chat import (
    Language,
    LlmModel,
    ChatType,
    MessageOrigin,
    ChatCreate,
    ChatSettingsBase,
    ChatSettingsUpdate,
    ChatUpdate,
    ConversationQuery,
    LlmAnswer,
    RetrievedExcerpt,
    ChatResponse,
)

from docgpt.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    OriginalDocumentCreate,
    OriginalDocumentResponse,
)

__all__ = [
    # Chat schemas
    "Language",
    "LlmModel",
    "ChatType",
    "MessageOrigin",
    "ChatCreate",
    "ChatSettingsBase",
    "ChatSettingsUpdate",
    "ChatUpdate",
    "ConversationQuery",
    "LlmAnswer",
    "RetrievedExcerpt",
    "ChatResponse",
    # Project schemas
    "ProjectCreate",
    "ProjectResponse",
    "OriginalDocumentCreate",
    "OriginalDocumentResponse",
]
