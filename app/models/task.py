# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, Integer, String, Text, Boolean, Date, Time, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from app.models.database import Base


class Task(Base):
    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("auth_accounts.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # Both optional; a date without a time means end of day
    due_date = Column(Date, nullable=True, index=True)
    due_time = Column(Time, nullable=True)

    is_completed = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("AuthAccount", back_populates="tasks")
    reminder_tracking = relationship("NotificationTracking", back_populates="task", cascade="all, delete-orphan")

    @property
    def section(self) -> str:
        if self.is_archived:
            return "archived"
        if self.is_completed:
            return "finished"
        return "active"

    def __repr__(self):
        return f"<Task id={self.id} section={self.section}>"
