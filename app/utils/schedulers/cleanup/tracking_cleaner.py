# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta
from pytz import timezone
from sqlalchemy.orm import Session
from app.models.database import SessionLocal
from app.models.notification_tracking import NotificationTracking
from app.config import DEFAULT_TIMEZONE
import logging

logger = logging.getLogger("cleanup")


def delete_stale_tracking_rows(now: datetime = None) -> int:
    """
    Tracking rows only de-duplicate reminders within a calendar day, so
    anything older than yesterday can go. Yesterday is kept for viewers
    whose local day lags the server's.
    """
    db: Session = SessionLocal()
    try:
        now = now or datetime.now(timezone(DEFAULT_TIMEZONE))
        cutoff = now.date() - timedelta(days=1)
        deleted = (
            db.query(NotificationTracking)
            .filter(NotificationTracking.sent_date < cutoff)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info(f"🗑️ Deleted {deleted} stale notification tracking rows.")
        return deleted
    except Exception as e:
        db.rollback()
        logger.error(f"🛑 Notification tracking cleanup failed: {e}", exc_info=True)
        return 0
    finally:
        db.close()
