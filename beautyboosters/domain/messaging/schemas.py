"""Support conversation schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_dk_phone


class ConversationOpen(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = None
    message: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_dk_phone(v)
        return v


class MessageCreate(BaseModel):
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("message")
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    sender: str
    email: Optional[str] = None
    message: Optional[str] = None
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str
    last_message_at: Optional[datetime] = None
    unread_admin_count: int
    unread_user_count: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConversationDetail(ConversationResponse):
    messages: list[MessageResponse] = []
