"""
Pydantic Schemas for Chat endpoints and socket events
Request/Response validation, camelCase on the wire
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from enum import Enum


class Language(str, Enum):
    """Answer language of a chat"""
    FRENCH = "fr"
    ENGLISH = "en"


class LlmModel(str, Enum):
    """LLM models a chat can be bound to"""
    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4O_MINI = "gpt-4o-mini"


class ChatType(str, Enum):
    """How a chat answers queries"""
    CONVERSATION = "conversation"  # Plain conversation with memory
    QA = "qa"                      # Retrieval-augmented over project documents


class MessageOrigin(str, Enum):
    """Who authored a message"""
    USER = "user"
    LLM = "llm"


class CamelModel(BaseModel):
    """Base for payloads exchanged with the browser client"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ---------- Requests ----------

class ChatSettingsBase(CamelModel):
    """Settings given when a chat is created"""
    language: Language = Field(..., description="Answer language")
    model: LlmModel = Field(..., description="LLM model")
    type: ChatType = Field(..., description="Chat type")


class ChatCreate(CamelModel):
    """Schema for creating a new chat"""
    name: str = Field(..., min_length=1, max_length=255, description="Chat name")
    settings: ChatSettingsBase


class ChatSettingsUpdate(CamelModel):
    """Schema for updating chat settings (all fields optional)"""
    language: Optional[Language] = None
    model: Optional[LlmModel] = None
    type: Optional[ChatType] = None


class ChatUpdate(CamelModel):
    """Schema for updating a chat (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    settings: Optional[ChatSettingsUpdate] = None


class ConversationQuery(CamelModel):
    """Payload of the 'conversation-query' event"""
    chat_id: UUID
    query: str = Field(..., min_length=1, max_length=10000)


class QueryRequest(CamelModel):
    """Body of POST /chats/{id}/query"""
    query: str = Field(..., min_length=1, max_length=10000)


class SummaryRequest(CamelModel):
    """Body of POST /chats/{id}/summaries"""
    document_id: UUID


# ---------- LLM boundary ----------

class LineRange(BaseModel):
    """Inclusive line span of an excerpt"""
    from_: int = Field(..., alias="from")
    to: int

    class Config:
        populate_by_name = True


class ExcerptLocation(BaseModel):
    lines: LineRange


class ExcerptMetadata(BaseModel):
    """Retriever metadata; 'source' is the original document path"""
    source: str
    loc: Optional[ExcerptLocation] = None


class RetrievedExcerpt(BaseModel):
    """A document excerpt returned by the retriever"""
    page_content: str = Field(..., alias="pageContent")
    metadata: ExcerptMetadata

    class Config:
        populate_by_name = True


class LlmAnswer(BaseModel):
    """LLM answer together with the excerpts it was grounded on"""
    text: str
    source_documents: List[RetrievedExcerpt] = Field(default_factory=list, alias="sourceDocuments")

    class Config:
        populate_by_name = True


# ---------- Responses ----------

class ChatSettingsResponse(CamelModel):
    id: UUID
    language: Language
    model: LlmModel
    type: ChatType


class SourceDocumentResponse(CamelModel):
    id: UUID
    original_document_id: UUID
    source: str
    page_content: str
    line_from: Optional[int] = None
    line_to: Optional[int] = None


class ChatMessageResponse(CamelModel):
    id: UUID
    content: str
    origin: MessageOrigin
    created_at: datetime
    sources: List[SourceDocumentResponse] = Field(default_factory=list)


class SummaryResponse(CamelModel):
    id: UUID
    document_id: UUID
    content: str
    created_at: Optional[datetime] = None


class ChatResponse(CamelModel):
    """Serialized chat, as sent in 'conversation-response'"""
    id: UUID
    project_id: UUID
    name: str
    settings: ChatSettingsResponse
    messages: List[ChatMessageResponse] = Field(default_factory=list)
    summaries: List[SummaryResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_chat(cls, chat, messages: bool = True, summaries: bool = True) -> "ChatResponse":
        """
        Build a response from a Chat row

        Relationships that were not requested are left empty instead of
        being lazy loaded.
        """
        return cls(
            id=chat.id,
            project_id=chat.project_id,
            name=chat.name,
            settings=ChatSettingsResponse.model_validate(chat.settings),
            messages=[ChatMessageResponse.model_validate(m) for m in chat.messages] if messages else [],
            summaries=[SummaryResponse.model_validate(s) for s in chat.summaries] if summaries else [],
            created_at=chat.created_at,
        )

