"""
DocGPT API - FastAPI application entry point
Persisted project chats answered by an LLM, over REST and Socket.IO
"""

import logging

# Configure logging to show INFO level
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s"
)

from contextlib import asynccontextmanager
import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from docgpt.config import settings
from docgpt.database import create_tables
from docgpt.utils.error_handlers import setup_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables on startup"""
    create_tables()
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started")
    logger.info(f"Socket.IO endpoint: http://{settings.API_HOST}:{settings.API_PORT}/socket.io/")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Chat with the documents of your projects",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "projects", "description": "Projects, documents and chat creation"},
        {"name": "chats", "description": "Chat management and queries"}
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy"
    }


# Import and register routers
from docgpt.api import projects, chats, sockets

app.include_router(projects.router, prefix="/api/v1")
app.include_router(chats.router, prefix="/api/v1")

# Socket.IO in front of the REST app; other paths fall through to FastAPI
socket_app = socketio.ASGIApp(sockets.sio, other_asgi_app=app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "docgpt.main:socket_app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
