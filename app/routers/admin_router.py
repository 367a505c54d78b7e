# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pytz import utc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth import get_db, require_admin
from app.models.account import AuthAccount
from app.models.audit_log import AuditLog
from app.models.profile import Profile, Role
from app.schemas.admin_schemas import RenameUserRequest
from app.services.audit_logger import AUDIT_ACTIONS
from app.services.dashboard_session import dashboard_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

AUDIT_LOG_LIMIT = 500


def serialize_profile(profile: Profile) -> dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "email": profile.email,
        "role": profile.role.value,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
    }


def serialize_audit_log(entry: AuditLog) -> dict:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "username": entry.username,
        "action": entry.action,
        "entity_type": entry.entity_type,
        "entity_id": entry.entity_id,
        "details": entry.details or {},
        "created_at": utc.localize(entry.created_at).isoformat() if entry.created_at else None,
    }


@router.get("/users")
def list_users(db: Session = Depends(get_db), admin: AuthAccount = Depends(require_admin)):
    profiles = (
        db.query(Profile)
        .filter(Profile.role != Role.admin)
        .order_by(Profile.created_at.desc())
        .all()
    )
    return [serialize_profile(p) for p in profiles]


@router.patch("/users/{user_id}")
def rename_user(
    user_id: str,
    payload: RenameUserRequest,
    db: Session = Depends(get_db),
    admin: AuthAccount = Depends(require_admin)
):
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")

    profile.username = payload.username
    db.commit()
    return serialize_profile(profile)


@router.delete("/users/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db), admin: AuthAccount = Depends(require_admin)):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You can't delete your own account")

    account = db.query(AuthAccount).filter(AuthAccount.id == user_id).first()
    if not account:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        # Tasks, notifications and tracking rows go with the account; audit rows stay
        db.delete(account)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"🛑 Failed to delete user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete user")

    dashboard_sessions.unmount_user(user_id)
    logger.info(f"🗑️ Admin {admin.id} deleted user {user_id}")
    return {"status": "deleted"}


@router.get("/audit-logs")
def list_audit_logs(
    action: Optional[str] = Query(None),
    limit: int = Query(AUDIT_LOG_LIMIT, ge=1, le=AUDIT_LOG_LIMIT),
    db: Session = Depends(get_db),
    admin: AuthAccount = Depends(require_admin)
):
    if action and action != "all" and action not in AUDIT_ACTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown action '{action}'")

    try:
        query = db.query(AuditLog)
        if action and action != "all":
            query = query.filter(AuditLog.action == action)
        logs = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
    except SQLAlchemyError as e:
        logger.error(f"🛑 Error fetching audit logs: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return [serialize_audit_log(entry) for entry in logs]
