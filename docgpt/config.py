"""
Configuration management for DocGPT
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///./docgpt.db"
    DEBUG: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    API_RELOAD: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:4200", "http://localhost:3000"]

    # Application
    APP_NAME: str = "DocGPT"
    APP_VERSION: str = "0.1.0"

    # LLM Provider (LiteLLM format: provider/model)
    OPENAI_API_KEY: str = ""
    LLM_PROVIDER: str = "openai"
    LLM_API_BASE: str = ""  # Optional: custom API base URL
    LLM_TIMEOUT: int = 60  # Seconds, passed straight to the client

    # Generation defaults (overridden per model by MODEL_PRESETS)
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 1000

    # Conversation memory
    MEMORY_WINDOW: int = 10  # Past messages replayed to the model

    # Retrieval over project documents (qa chats)
    RETRIEVAL_TOP_K: int = 4
    RETRIEVAL_CHUNK_SIZE: int = 600  # Characters per chunk
    RETRIEVAL_MIN_CHUNK_CHARS: int = 24
    RETRIEVAL_MIN_SCORE: float = 0.1  # Cosine similarity below which chunks are dropped

    # Summaries
    SUMMARY_MAX_CHARS: int = 8000  # Document characters sent to the model

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


# Per-model generation defaults
MODEL_PRESETS = {
    "gpt-3.5-turbo": {
        "temperature": 0.7,
        "max_tokens": 1000,
    },
    "gpt-4": {
        "temperature": 0.5,
        "max_tokens": 2000,
    },
    "gpt-4o-mini": {
        "temperature": 0.5,
        "max_tokens": 2000,
    },
}
