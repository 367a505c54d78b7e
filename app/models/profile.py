# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from app.models.database import Base
from app.config import DEFAULT_TIMEZONE
import enum


class Role(enum.Enum):
    admin = "admin"
    user = "user"


class NotificationPermission(enum.Enum):
    default = "default"
    granted = "granted"
    denied = "denied"


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("auth_accounts.id"), primary_key=True)
    username = Column(String, nullable=False)
    role = Column(Enum(Role), default=Role.user, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # 🕒 Viewer's local calendar (pytz name)
    timezone = Column(String, default=DEFAULT_TIMEZONE)

    # 📲 Native notifications; no push_token means the device can't show them
    notification_permission = Column(
        Enum(NotificationPermission),
        default=NotificationPermission.default,
        nullable=False
    )
    push_token = Column(String, nullable=True)

    account = relationship("AuthAccount", back_populates="profile")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    def __repr__(self):
        return f"<Profile id={self.id} username={self.username} role={self.role.value}>"
