"""
Chat request and stream event models.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single message in the conversation sent by the client."""

    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    messages: list[ChatMessage] = Field(..., min_length=1, description="Conversation so far")
    model_id: Optional[str] = Field(None, description="Catalog model ID (default if omitted)")


class ChatEventType(str, Enum):
    """SSE event types emitted by the chat stream."""

    CHUNK = "chunk"
    DONE = "done"
    ERROR = "error"
