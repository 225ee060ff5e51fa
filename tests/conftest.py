"""
Pytest configuration and shared fixtures for DocGPT tests

Provides:
- In-memory SQLite database per test
- Test project, documents and chats
- Fake chat models standing in for the LLM provider
"""

import pytest
from typing import Generator, List
from pydantic import Field
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from docgpt.database import Base
from docgpt.models import Project, OriginalDocument
from docgpt.repositories.chat_repository import ChatRepository
from docgpt.repositories.project_repository import ProjectRepository
from docgpt.schemas.chat import ChatCreate


class RecordingChatModel(FakeListChatModel):
    """FakeListChatModel that keeps the messages of every call"""

    received: list = Field(default_factory=list)

    def _call(self, messages, *args, **kwargs) -> str:
        self.received.append(list(messages))
        return super()._call(messages, *args, **kwargs)


@pytest.fixture
def test_db_engine_sqlite():
    """Create in-memory SQLite database for tests (fast, isolated)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_db_engine_sqlite) -> Generator[Session, None, None]:
    """Database session bound to the per-test engine"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine_sqlite)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def chat_repository(db_session) -> ChatRepository:
    return ChatRepository(db_session)


@pytest.fixture
def project_repository(db_session) -> ProjectRepository:
    return ProjectRepository(db_session)


@pytest.fixture
def test_project(project_repository) -> Project:
    """Create a test project"""
    return project_repository.create_project("Test Project")


@pytest.fixture
def other_project(project_repository) -> Project:
    """A second project, for cross-project checks"""
    return project_repository.create_project("Other Project")


@pytest.fixture
def test_documents(project_repository, test_project) -> List[OriginalDocument]:
    """Two source files of the test project"""
    readme = "\n".join([
        "# Billing service",
        "The billing service computes monthly invoices.",
        "Invoices are generated on the first day of each month.",
        "Refunds are handled by the payments team.",
    ])
    config = "\n".join([
        "retry_count = 3",
        "invoice_currency = EUR",
        "timezone = Europe/Paris",
    ])
    return [
        project_repository.add_original_document(test_project.id, "docs/README.md", readme),
        project_repository.add_original_document(test_project.id, "config/billing.toml", config),
    ]


@pytest.fixture
def conversation_chat(chat_repository, test_project):
    """A French conversation chat"""
    return chat_repository.create_chat(test_project.id, ChatCreate.model_validate({
        "name": "conversation",
        "settings": {"language": "fr", "model": "gpt-3.5-turbo", "type": "conversation"},
    }))


@pytest.fixture
def qa_chat(chat_repository, test_project):
    """An English retrieval-augmented chat"""
    return chat_repository.create_chat(test_project.id, ChatCreate.model_validate({
        "name": "qa",
        "settings": {"language": "en", "model": "gpt-4", "type": "qa"},
    }))


@pytest.fixture
def fake_llm() -> RecordingChatModel:
    """Chat model answering from a fixed list"""
    return RecordingChatModel(responses=["First answer", "Second answer", "Third answer"])


@pytest.fixture
def llm_factory(fake_llm):
    """LLM factory always returning the fake model, recording requested models"""
    requested = []

    def factory(model: str):
        requested.append(model)
        return fake_llm

    factory.requested = requested
    return factory


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for API endpoints"
    )
    config.addinivalue_line(
        "markers", "asyncio: Async tests requiring asyncio event loop"
    )
