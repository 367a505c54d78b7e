# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.models.database import Base


class AuthAccount(Base):
    """Hosted-auth identity. Profiles, tasks and notifications hang off it."""

    __tablename__ = "auth_accounts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # ✅ Relationships
    profile = relationship("Profile", back_populates="account", uselist=False, cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<AuthAccount id={self.id} email={self.email}>"
