"""
Chat module.

The request pipeline: gate, charge, then stream the LLM reply.

Public API:
- ChatService: Model resolution and reply streaming
- ChatRequest, ChatMessage: Request models
"""

from .models import ChatEventType, ChatMessage, ChatRequest
from .service import ChatService

__all__ = [
    "ChatEventType",
    "ChatMessage",
    "ChatRequest",
    "ChatService",
]
