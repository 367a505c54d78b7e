# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from app.models.database import Base


class NotificationTracking(Base):
    """
    Per-day marker that a reminder of `notification_type` went out for a task.
    Logically keyed by (task_id, notification_type, sent_date); there is no
    unique constraint, so concurrent pollers can still write duplicates.
    """

    __tablename__ = "notification_tracking"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("task.id"), nullable=False, index=True)
    notification_type = Column(String, nullable=False)
    sent_date = Column(Date, nullable=False)

    task = relationship("Task", back_populates="reminder_tracking")
