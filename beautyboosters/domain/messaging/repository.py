"""Conversation repository"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models_messaging import Conversation, ConversationMessage


class ConversationRepository:
    @staticmethod
    def get_all(db: Session, status: Optional[str] = None) -> list[Conversation]:
        query = db.query(Conversation)
        if status:
            query = query.filter(Conversation.status == status)
        return query.order_by(
            func.coalesce(Conversation.last_message_at, Conversation.created_at).desc()
        ).all()

    @staticmethod
    def get_by_id(db: Session, conversation_id: str) -> Optional[Conversation]:
        return db.query(Conversation).filter(Conversation.id == conversation_id).first()

    @staticmethod
    def get_latest_for_user(db: Session, user_id: str) -> Optional[Conversation]:
        return (
            db.query(Conversation)
            .filter(Conversation.user_id == user_id)
            .order_by(Conversation.created_at.desc())
            .first()
        )

    @staticmethod
    def mark_read(db: Session, conversation_id: str, from_sender: str) -> int:
        return (
            db.query(ConversationMessage)
            .filter(
                ConversationMessage.conversation_id == conversation_id,
                ConversationMessage.sender == from_sender,
                ConversationMessage.read_at.is_(None),
            )
            .update({ConversationMessage.read_at: datetime.utcnow()}, synchronize_session=False)
        )
