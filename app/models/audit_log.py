# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime
from app.models.database import Base


class AuditLog(Base):
    # Append-only. user_id carries no foreign key, entries outlive deleted accounts.
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    username = Column(String, nullable=False)
    action = Column(String, nullable=False, index=True)  # login, logout, create_task, ...
    entity_type = Column(String, nullable=True)
    entity_id = Column(String, nullable=True)
    details = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<AuditLog id={self.id} action={self.action} user={self.username}>"
