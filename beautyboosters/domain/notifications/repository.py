"""Notification repository - Database operations for stored notifications"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import ROLE_ADMIN, Notification, UserRole


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def get_for_recipient(db: Session, recipient_id: str, unread_only: bool = False) -> list[Notification]:
        query = db.query(Notification).filter(Notification.recipient_id == recipient_id)
        if unread_only:
            query = query.filter(Notification.read_at.is_(None))
        return query.order_by(Notification.created_at.desc()).all()

    @staticmethod
    def get_by_id(db: Session, notification_id: str, recipient_id: str) -> Optional[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.recipient_id == recipient_id)
            .first()
        )

    @staticmethod
    def count_unread(db: Session, recipient_id: str) -> int:
        return (
            db.query(Notification)
            .filter(Notification.recipient_id == recipient_id, Notification.read_at.is_(None))
            .count()
        )

    @staticmethod
    def mark_all_read(db: Session, recipient_id: str) -> int:
        updated = (
            db.query(Notification)
            .filter(Notification.recipient_id == recipient_id, Notification.read_at.is_(None))
            .update({Notification.read_at: datetime.utcnow()}, synchronize_session=False)
        )
        db.commit()
        return updated

    @staticmethod
    def admin_ids(db: Session) -> list[str]:
        rows = db.query(UserRole.user_id).filter(UserRole.role == ROLE_ADMIN).all()
        return [row[0] for row in rows]
