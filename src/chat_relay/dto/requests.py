"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    """Request DTO for submitting a user message.

    Blank content is rejected by the handler, not here, so the client
    receives the same 400 for "" and "   ".
    """

    content: str = Field(..., description="The user's message text")
