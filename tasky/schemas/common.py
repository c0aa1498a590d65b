"""
Shared response schemas.
"""
from pydantic import BaseModel, Field


class Message(BaseModel):
    """Plain acknowledgement or error body"""
    message: str = Field(..., description="Human readable message")
