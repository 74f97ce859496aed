"""Notification service - stored in-app notifications"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Notification, User
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    recipient_id: str,
    title: str,
    message: str,
    type: str,
    job_id: Optional[str] = None,
) -> Notification:
    """
    Add a notification row to the session.

    The caller owns the transaction, so the notification is committed
    together with the state change it describes.
    """
    notification = Notification(
        recipient_id=recipient_id, title=title, message=message, type=type, job_id=job_id
    )
    db.add(notification)
    return notification


def notify_admins(db: Session, title: str, message: str, type: str, job_id: Optional[str] = None) -> int:
    admin_ids = NotificationRepository.admin_ids(db)
    for admin_id in admin_ids:
        notify(db, admin_id, title, message, type, job_id)
    return len(admin_ids)


class NotificationService:
    """Service layer for a recipient's notification inbox"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def list_notifications(self, user: User, unread_only: bool = False) -> list[Notification]:
        return self.repo.get_for_recipient(self.db, user.id, unread_only)

    def unread_count(self, user: User) -> int:
        return self.repo.count_unread(self.db, user.id)

    def mark_read(self, notification_id: str, user: User) -> Notification:
        notification = self.repo.get_by_id(self.db, notification_id, user.id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        if notification.read_at is None:
            notification.read_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, user: User) -> dict:
        updated = self.repo.mark_all_read(self.db, user.id)
        logger.info(f"📭 Marked {updated} notifications read for {user.email}")
        return {"updated": updated}
