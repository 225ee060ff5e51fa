"""
ChatSettings Model - Language, model and type of a chat
"""

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship
import uuid

from docgpt.database import Base


class ChatSettings(Base):
    """
    Chat settings model - one-to-one with Chat

    Attributes:
        id: Settings UUID
        language: Answer language ('fr', 'en')
        model: LLM model identifier ('gpt-3.5-turbo', 'gpt-4', ...)
        type: Chat type ('conversation', 'qa')

    Values are stored as plain strings; the enums in
    docgpt.schemas.chat define the accepted values.
    """

    __tablename__ = "chat_settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    language = Column(String(8), nullable=False)
    model = Column(String(64), nullable=False)
    type = Column(String(32), nullable=False)

    chat = relationship("Chat", back_populates="settings", uselist=False)

    def __repr__(self):
        return f"<ChatSettings(id={self.id}, language={self.language}, model={self.model}, type={self.type})>"
