"""Messaging service - support conversations between customers and admins"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_messaging import Conversation, ConversationMessage
from .repository import ConversationRepository
from .schemas import ConversationOpen

logger = logging.getLogger(__name__)


class MessagingService:
    """
    One conversation per user, shared by all admins.

    Each side has an unread counter that the other side's messages raise
    and its own read call resets.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ConversationRepository()

    def get_conversation(self, conversation_id: str) -> Conversation:
        conversation = self.repo.get_by_id(self.db, conversation_id)
        if not conversation:
            raise HTTPException(status_code=404, detail="Conversation not found")
        return conversation

    def get_own(self, user: User) -> Conversation:
        conversation = self.repo.get_latest_for_user(self.db, user.id)
        if not conversation:
            raise HTTPException(status_code=404, detail="No conversation yet")
        return conversation

    def open_conversation(self, user: User, data: ConversationOpen) -> Conversation:
        conversation = self.repo.get_latest_for_user(self.db, user.id)
        if not conversation:
            conversation = Conversation(
                user_id=user.id,
                name=data.name or user.full_name,
                email=user.email,
                phone=data.phone or user.phone,
                status="open",
            )
            self.db.add(conversation)
            self.db.flush()
            logger.info(f"💬 Conversation {conversation.id} opened by {user.email}")
        if data.message:
            self._add_message(conversation, "user", data.message.strip(), user.email)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def _add_message(
        self, conversation: Conversation, sender: str, text: str, email: Optional[str]
    ) -> ConversationMessage:
        message = ConversationMessage(
            conversation_id=conversation.id, sender=sender, email=email, message=text
        )
        self.db.add(message)
        conversation.last_message_at = datetime.utcnow()
        if sender == "user":
            conversation.unread_admin_count = (conversation.unread_admin_count or 0) + 1
            # A customer writing again reopens a closed conversation
            conversation.status = "open"
        else:
            conversation.unread_user_count = (conversation.unread_user_count or 0) + 1
        return message

    def post_user_message(self, user: User, text: str) -> ConversationMessage:
        conversation = self.repo.get_latest_for_user(self.db, user.id)
        if not conversation:
            conversation = self.open_conversation(user, ConversationOpen())
        message = self._add_message(conversation, "user", text, user.email)
        self.db.commit()
        self.db.refresh(message)
        return message

    def post_admin_reply(self, conversation_id: str, admin: User, text: str) -> ConversationMessage:
        conversation = self.get_conversation(conversation_id)
        message = self._add_message(conversation, "admin", text, admin.email)
        self.db.commit()
        self.db.refresh(message)
        logger.info(f"💬 Admin {admin.email} replied in conversation {conversation.id}")
        return message

    def mark_read(self, conversation: Conversation, reader: str) -> Conversation:
        """reader is "user" or "admin"; the other side's messages get stamped"""
        if reader == "admin":
            self.repo.mark_read(self.db, conversation.id, "user")
            conversation.unread_admin_count = 0
        else:
            self.repo.mark_read(self.db, conversation.id, "admin")
            conversation.unread_user_count = 0
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def list_conversations(self, status: Optional[str] = None) -> list[Conversation]:
        return self.repo.get_all(self.db, status)

    def close(self, conversation_id: str) -> Conversation:
        conversation = self.get_conversation(conversation_id)
        conversation.status = "closed"
        self.db.commit()
        self.db.refresh(conversation)
        return conversation
