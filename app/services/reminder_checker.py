# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
One-hour-before-due reminders.

A mounted dashboard polls `run_reminder_check` every minute. Each poll looks
at the user's open tasks with a due date, and for any task whose due moment
is roughly an hour away raises a single `task_reminder` notification per
calendar day. Best-effort only: nothing runs while no dashboard is mounted.

The tracking lookup, notification insert and tracking insert are three
separate round-trips with no lock or unique constraint between them, so two
dashboards polling the same user at the same moment can both send.
"""

import logging
from datetime import datetime, time, date
from typing import Optional
from pytz import timezone, UnknownTimeZoneError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import DEFAULT_TIMEZONE
from app.models.database import SessionLocal
from app.models.account import AuthAccount
from app.models.task import Task
from app.models.notification_tracking import NotificationTracking
from app.services.notification_service import create_notification

logger = logging.getLogger(__name__)

REMINDER_TYPE = "1hr_reminder"
NOTIFICATION_TYPE = "task_reminder"
REMINDER_TITLE = "⏰ Task Due Soon"

# ±5 minutes around exactly one hour
DUE_SOON_MIN_HOURS = 0.92
DUE_SOON_MAX_HOURS = 1.08

END_OF_DAY = time(23, 59, 59)


def viewer_timezone(account: AuthAccount):
    name = DEFAULT_TIMEZONE
    if account.profile and account.profile.timezone:
        name = account.profile.timezone
    try:
        return timezone(name)
    except UnknownTimeZoneError:
        logger.warning(f"⚠️ Unknown timezone '{name}' for {account.id}, using {DEFAULT_TIMEZONE}")
        return timezone(DEFAULT_TIMEZONE)


def due_datetime(task: Task, tz) -> datetime:
    return tz.localize(datetime.combine(task.due_date, task.due_time or END_OF_DAY))


def hours_until_due(task: Task, now: datetime, tz) -> float:
    return (due_datetime(task, tz) - now).total_seconds() / 3600


def is_due_soon(hours: float) -> bool:
    return DUE_SOON_MIN_HOURS <= hours <= DUE_SOON_MAX_HOURS


def _already_sent(db: Session, task_id: int, today: date) -> bool:
    return db.query(NotificationTracking.id).filter(
        NotificationTracking.task_id == task_id,
        NotificationTracking.notification_type == REMINDER_TYPE,
        NotificationTracking.sent_date == today,
    ).first() is not None


def check_task_reminders(db: Session, user_id: Optional[str], now: Optional[datetime] = None) -> int:
    """
    Runs one reminder pass for `user_id` and returns how many reminders went out.
    `now` defaults to the system clock; a naive value is read in the viewer's timezone.
    """
    if not user_id:
        return 0

    account = db.query(AuthAccount).filter(AuthAccount.id == user_id).first()
    if not account:
        return 0

    tz = viewer_timezone(account)
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = tz.localize(now)

    try:
        tasks = db.query(Task).filter(
            Task.user_id == user_id,
            Task.due_date.isnot(None),
            Task.is_completed == False,  # noqa: E712
            Task.is_archived == False,  # noqa: E712
        ).all()
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error fetching tasks for reminders ({user_id}): {e}")
        db.rollback()
        return 0

    today = now.astimezone(tz).date()
    sent = 0

    for task in tasks:
        if not is_due_soon(hours_until_due(task, now, tz)):
            continue

        try:
            if _already_sent(db, task.id, today):
                continue
        except SQLAlchemyError as e:
            logger.error(f"🛑 Tracking lookup failed for task {task.id}: {e}")
            db.rollback()
            continue

        notification = create_notification(
            db,
            user_id,
            title=REMINDER_TITLE,
            message=f'"{task.title}" is due in 1 hour!',
            notification_type=NOTIFICATION_TYPE,
            task_id=task.id,
        )
        if notification is None:
            # Retried on the next poll, if the task is still inside the window
            continue

        try:
            db.add(NotificationTracking(task_id=task.id, notification_type=REMINDER_TYPE, sent_date=today))
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"🛑 Tracking insert failed for task {task.id}: {e}")
            db.rollback()
            continue

        sent += 1
        logger.info(f"🔔 Reminder sent for task {task.id} ({user_id})")

    return sent


def run_reminder_check(user_id: str) -> int:
    """Scheduler entrypoint: one pass in a fresh session."""
    db: Session = SessionLocal()
    try:
        return check_task_reminders(db, user_id)
    except Exception as e:
        logger.error(f"[ReminderChecker] Error: {e}", exc_info=True)
        return 0
    finally:
        db.close()
