# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Audit trail writer.

Every tracked user action (sign-in/out and the task lifecycle) leaves one
append-only row in `audit_logs`. Writes run in their own session and are
best-effort: a failed audit write is logged and never reaches the request
that triggered it. Routers schedule these through FastAPI BackgroundTasks.
"""

import logging
from datetime import date, time, datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.database import SessionLocal
from app.models.account import AuthAccount
from app.models.profile import Profile
from app.models.audit_log import AuditLog
from app.utils.best_effort import best_effort

logger = logging.getLogger(__name__)

AUDIT_ACTIONS = ("login", "logout", "create_task", "edit_task", "finish_task", "archive_task")
TRACKED_TASK_FIELDS = ("title", "description", "due_date", "due_time")


def _jsonable(value):
    if isinstance(value, (date, time, datetime)):
        return value.isoformat()
    return value


def compute_task_changes(before: dict, after: dict) -> dict:
    """
    {field: {"from": old, "to": new}} for each tracked field whose value
    differs between the two snapshots. Unchanged fields are left out.
    """
    changes = {}
    for field in TRACKED_TASK_FIELDS:
        old, new = before.get(field), after.get(field)
        if old != new:
            changes[field] = {"from": _jsonable(old), "to": _jsonable(new)}
    return changes


def _resolve_username(db: Session, account: AuthAccount, username: Optional[str]) -> str:
    if username:
        return username

    try:
        profile = db.query(Profile).filter(Profile.id == account.id).first()
    except SQLAlchemyError as e:
        logger.warning(f"⚠️ Profile lookup failed for {account.id}: {e}")
        db.rollback()
        profile = None

    if profile:
        return profile.username
    return account.email or "Unknown"


@best_effort("Audit logging")
def log_audit_event(
    action: str,
    user_id: Optional[str],
    entity_type: Optional[str] = None,
    entity_id=None,
    details: Optional[dict] = None,
    username: Optional[str] = None,
) -> Optional[AuditLog]:
    # Timestamp is captured now, not when the row lands
    created_at = datetime.utcnow()

    db: Session = SessionLocal()
    try:
        account = None
        if user_id:
            account = db.query(AuthAccount).filter(AuthAccount.id == user_id).first()
        if not account:
            logger.warning(f"⚠️ Cannot log audit event '{action}': no user authenticated")
            return None

        entry = AuditLog(
            user_id=account.id,
            username=_resolve_username(db, account, username),
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=details or {},
            created_at=created_at,
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        logger.info(f"📝 Audit {action} by {entry.username}")
        return entry
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ---------------------- Convenience wrappers ----------------------

def log_login(user_id: str, username: Optional[str] = None):
    return log_audit_event("login", user_id, username=username,
                           details={"timestamp": datetime.utcnow().isoformat()})


def log_logout(user_id: str, username: Optional[str] = None):
    return log_audit_event("logout", user_id, username=username,
                           details={"timestamp": datetime.utcnow().isoformat()})


def log_create_task(user_id: str, task_id: int, task_title: str):
    return log_audit_event("create_task", user_id, entity_type="task", entity_id=task_id,
                           details={"title": task_title})


def log_edit_task(user_id: str, task_id: int, task_title: str, changes: dict):
    return log_audit_event("edit_task", user_id, entity_type="task", entity_id=task_id,
                           details={"title": task_title, "changes": changes})


def log_finish_task(user_id: str, task_id: int, task_title: str):
    return log_audit_event("finish_task", user_id, entity_type="task", entity_id=task_id,
                           details={"title": task_title})


def log_archive_task(user_id: str, task_id: int, task_title: str):
    return log_audit_event("archive_task", user_id, entity_type="task", entity_id=task_id,
                           details={"title": task_title})
