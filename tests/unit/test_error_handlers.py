"""
Unit tests for ErrorHandler payloads
"""

import pytest
from unittest.mock import MagicMock
from uuid import uuid4
from sqlalchemy.exc import IntegrityError

from docgpt.core.exceptions import NotFoundError, DuplicateError
from docgpt.utils.error_handlers import ErrorHandler


@pytest.mark.unit
class TestErrorPayloads:

    def test_not_found(self):
        chat_id = uuid4()
        payload = ErrorHandler.to_payload(NotFoundError("chat", chat_id))

        assert payload["error"] == "not_found"
        assert payload["resource"] == "chat"
        assert payload["identifier"] == str(chat_id)

    def test_duplicate(self):
        payload = ErrorHandler.to_payload(DuplicateError("Document 'a.md' already exists"))
        assert payload["error"] == "duplicate"

    def test_database_integrity(self):
        error = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))
        payload = ErrorHandler.to_payload(error)

        assert payload["error"] == "integrity_error"
        assert "UNIQUE constraint failed" in payload["details"]

    def test_llm_error(self):
        from openai import APIError

        error = APIError("provider exploded", request=MagicMock(), body=None)
        payload = ErrorHandler.to_payload(error)

        assert payload["error"] == "api_error"

    def test_generic(self):
        payload = ErrorHandler.to_payload(RuntimeError("boom"))

        assert payload["error"] == "internal_error"
        assert payload["type"] == "RuntimeError"

    def test_database_error_without_driver_error(self):
        from sqlalchemy.exc import SQLAlchemyError

        payload = ErrorHandler.to_payload(SQLAlchemyError("store offline"))

        assert payload["error"] == "database_error"
        assert "store offline" in payload["details"]


@pytest.mark.unit
class TestRegisteredHandlers:
    """Status codes of the JSON error responses"""

    @pytest.fixture
    def client(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from docgpt.utils.error_handlers import setup_error_handlers

        app = FastAPI()
        setup_error_handlers(app)

        @app.get("/missing")
        async def missing():
            raise NotFoundError("chat", "abc")

        @app.get("/duplicate")
        async def duplicate():
            raise DuplicateError("Document 'a.md' already exists")

        @app.get("/integrity")
        async def integrity():
            raise IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))

        return TestClient(app, raise_server_exceptions=False)

    def test_not_found_is_404(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {
            "error": "not_found",
            "message": "Chat not found.",
            "resource": "chat",
            "identifier": "abc",
        }

    def test_duplicate_is_409(self, client):
        assert client.get("/duplicate").status_code == 409

    def test_integrity_is_500(self, client):
        response = client.get("/integrity")

        assert response.status_code == 500
        assert response.json()["error"] == "integrity_error"
