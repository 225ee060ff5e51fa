"""
Error payloads shared by the REST API and the Socket.IO events

The same dictionaries are returned as JSON bodies and emitted as
'conversation-error' data, so clients handle both the same way.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from openai import APIError, RateLimitError, APITimeoutError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Dict, Any
import logging

from docgpt.core.exceptions import NotFoundError, DuplicateError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Maps exceptions raised while serving a chat to error payloads"""

    @staticmethod
    def handle_llm_error(error: APIError) -> Dict[str, Any]:
        """
        Provider failure while answering a query

        LiteLLM re-raises provider failures as openai exception types.
        """
        if isinstance(error, RateLimitError):
            logger.warning(f"LLM rate limited: {error}")
            return {
                "error": "rate_limit",
                "message": "The language model is rate limited, retry shortly.",
                "retry_after": 60
            }
        if isinstance(error, APITimeoutError):
            logger.warning(f"LLM timed out: {error}")
            return {"error": "timeout", "message": "The language model did not answer in time."}

        logger.error(f"LLM provider error: {error}")
        return {
            "error": "api_error",
            "message": "The language model could not answer.",
            "details": str(error)
        }

    @staticmethod
    def handle_database_error(error: SQLAlchemyError) -> Dict[str, Any]:
        """Failed chat, message or source write"""
        details = str(getattr(error, "orig", None) or error)
        if isinstance(error, IntegrityError):
            logger.warning(f"Integrity error: {details}")
            return {"error": "integrity_error", "message": "The chat could not be saved.", "details": details}

        logger.error(f"Database error: {details}")
        return {"error": "database_error", "message": "The chat store is unavailable.", "details": details}

    @staticmethod
    def handle_not_found_error(error: NotFoundError) -> Dict[str, Any]:
        logger.warning(str(error))
        return {
            "error": "not_found",
            "message": f"{error.resource.capitalize()} not found.",
            "resource": error.resource,
            "identifier": error.identifier
        }

    @staticmethod
    def handle_generic_error(error: Exception) -> Dict[str, Any]:
        logger.error(f"Unexpected {type(error).__name__}: {error}", exc_info=error)
        return {
            "error": "internal_error",
            "message": "The query could not be processed.",
            "type": type(error).__name__
        }

    @classmethod
    def to_payload(cls, error: Exception) -> Dict[str, Any]:
        """Error payload for any exception, as emitted to socket clients"""
        if isinstance(error, NotFoundError):
            return cls.handle_not_found_error(error)
        if isinstance(error, DuplicateError):
            logger.warning(f"Duplicate resource: {error}")
            return {"error": "duplicate", "message": str(error)}
        if isinstance(error, APIError):
            return cls.handle_llm_error(error)
        if isinstance(error, SQLAlchemyError):
            return cls.handle_database_error(error)
        return cls.handle_generic_error(error)


# FastAPI exception handlers; status code per error family

STATUS_CODES = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (APIError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (SQLAlchemyError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (Exception, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=ErrorHandler.to_payload(exc))
    return handle


def setup_error_handlers(app):
    """Register one JSON exception handler per error family on the app"""
    for exc_class, status_code in STATUS_CODES:
        app.add_exception_handler(exc_class, _handler(status_code))

    logger.info("Error handlers registered")
