"""
API Routes and Endpoints

Routers:
    - projects: Projects, documents and chat creation
    - chats: Chat CRUD, queries and summaries
    - sockets: Socket.IO conversation events
"""

from docgpt.api import projects, chats, sockets

__all__ = ["projects", "chats", "sockets"]
