# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Callable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.models.profile import Profile, NotificationPermission
from app.utils.best_effort import best_effort
from app.utils.firebase import send_fcm_push

logger = logging.getLogger(__name__)

FETCH_LIMIT = 50
NATIVE_ICON = "/logo192.png"


def fetch_notifications(db: Session, user_id: Optional[str], unread_only: bool = False) -> List[Notification]:
    """
    Up to 50 of the user's notifications, newest first.
    Unauthenticated callers and query failures both get an empty list.
    """
    if not user_id:
        return []

    try:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read == False)  # noqa: E712
        return (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(FETCH_LIMIT)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error fetching notifications for {user_id}: {e}")
        db.rollback()
        return []


def unread_count(db: Session, user_id: Optional[str]) -> int:
    if not user_id:
        return 0
    try:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read == False)  # noqa: E712
            .count()
        )
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error counting unread notifications for {user_id}: {e}")
        db.rollback()
        return 0


def mark_notification_read(db: Session, user_id: str, notification_id: int) -> bool:
    try:
        updated = (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
        return updated > 0
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error marking notification {notification_id} as read: {e}")
        db.rollback()
        return False


def mark_all_notifications_read(db: Session, user_id: str) -> int:
    """Returns how many rows flipped; zero unread is simply 0."""
    if not user_id:
        return 0
    try:
        updated = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read == False)  # noqa: E712
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
        return updated
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error marking all notifications as read for {user_id}: {e}")
        db.rollback()
        return 0


def delete_notification(db: Session, user_id: str, notification_id: int) -> bool:
    try:
        deleted = (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted > 0
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error deleting notification {notification_id}: {e}")
        db.rollback()
        return False


@best_effort("Native notification", default=False)
def deliver_native_notification(db: Session, notification: Notification) -> bool:
    profile = db.query(Profile).filter(Profile.id == notification.user_id).first()
    if not profile or profile.notification_permission != NotificationPermission.granted:
        return False
    if not profile.push_token:
        logger.info(f"📵 No push token for {profile.id}, skipping native notification")
        return False

    message_id = send_fcm_push(
        token=profile.push_token,
        title=notification.title,
        body=notification.message,
        icon=NATIVE_ICON,
        tag=str(notification.task_id) if notification.task_id else "notification",
        data={"notification_id": notification.id, "type": notification.type},
    )
    if not message_id:
        return False

    logger.info(f"📲 Native notification sent to {profile.id}: {message_id}")
    return True


def create_notification(
    db: Session,
    user_id: Optional[str],
    title: str,
    message: str,
    notification_type: str = "system",
    task_id: Optional[int] = None,
) -> Optional[Notification]:
    """
    Stores a notification for the user, then pushes it natively when the
    user granted permission. Returns None if nothing was stored.
    """
    if not user_id:
        return None

    try:
        notification = Notification(
            user_id=user_id,
            task_id=task_id,
            type=notification_type,
            title=title,
            message=message,
        )
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error creating notification for {user_id}: {e}")
        db.rollback()
        return None

    deliver_native_notification(db, notification)
    return notification


def request_permission(db: Session, profile: Profile, prompt: Callable[[], str]) -> bool:
    """
    Idempotent permission request.

    - no push token: the device can't show native notifications, False
    - granted: True without prompting
    - denied: False, never prompts again
    - default: `prompt()` is asked once and its answer is stored
    """
    if not profile.push_token:
        logger.warning(f"⚠️ Device for {profile.id} does not support native notifications")
        return False

    if profile.notification_permission == NotificationPermission.granted:
        return True

    if profile.notification_permission == NotificationPermission.denied:
        return False

    answer = NotificationPermission(prompt())
    if answer != NotificationPermission.default:
        profile.notification_permission = answer
        db.commit()
        logger.info(f"🔔 Notification permission for {profile.id} is now {answer.value}")

    return answer == NotificationPermission.granted


def register_push_token(db: Session, profile: Profile, token: Optional[str]) -> None:
    profile.push_token = token or None
    db.commit()
