"""Messaging router - customer support chat"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, User
from .schemas import (
    ConversationDetail,
    ConversationOpen,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
)
from .service import MessagingService

router = APIRouter(prefix="/conversations", tags=["Messaging"])


def get_messaging_service(db: Session = Depends(get_db)) -> MessagingService:
    """Dependency injection for MessagingService"""
    return MessagingService(db)


# ============================================================================
# CUSTOMER SIDE
# ============================================================================


@router.post("", response_model=ConversationDetail)
async def open_conversation(
    data: ConversationOpen,
    current_user: User = Depends(get_current_user),
    service: MessagingService = Depends(get_messaging_service),
):
    """Open the user's conversation, or return the existing one"""
    return service.open_conversation(current_user, data)


@router.get("/mine", response_model=ConversationDetail)
async def get_own_conversation(
    current_user: User = Depends(get_current_user),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.get_own(current_user)


@router.post("/mine/messages", response_model=MessageResponse, status_code=201)
async def post_message(
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.post_user_message(current_user, data.message)


@router.post("/mine/read", response_model=ConversationResponse)
async def mark_own_read(
    current_user: User = Depends(get_current_user),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.mark_read(service.get_own(current_user), "user")


# ============================================================================
# ADMIN SIDE
# ============================================================================


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    status: Optional[str] = Query(None, description="open or closed"),
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: MessagingService = Depends(get_messaging_service),
):
    """Most recently active first"""
    return service.list_conversations(status)


@router.get("/{conversation_id}", response_model=ConversationDetail)
async def get_conversation(
    conversation_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.get_conversation(conversation_id)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=201)
async def reply(
    conversation_id: str,
    data: MessageCreate,
    admin: User = Depends(require_roles(ROLE_ADMIN)),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.post_admin_reply(conversation_id, admin, data.message)


@router.post("/{conversation_id}/read", response_model=ConversationResponse)
async def mark_read(
    conversation_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.mark_read(service.get_conversation(conversation_id), "admin")


@router.post("/{conversation_id}/close", response_model=ConversationResponse)
async def close_conversation(
    conversation_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: MessagingService = Depends(get_messaging_service),
):
    return service.close(conversation_id)
