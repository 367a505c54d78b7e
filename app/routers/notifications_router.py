# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user, get_current_profile
from app.models.account import AuthAccount
from app.models.notification import Notification
from app.models.profile import Profile
from app.schemas.notification_schemas import PermissionRequest, PushTokenRequest
from app.services.notification_service import (
    fetch_notifications,
    unread_count,
    mark_notification_read,
    mark_all_notifications_read,
    delete_notification,
    request_permission,
    register_push_token,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def serialize_notification(notification: Notification) -> dict:
    return {
        "id": notification.id,
        "task_id": notification.task_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "read": notification.read,
        "created_at": notification.created_at.isoformat() if notification.created_at else None,
    }


@router.get("")
def list_notifications(
    unread_only: bool = False,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return [serialize_notification(n) for n in fetch_notifications(db, account.id, unread_only=unread_only)]


@router.get("/unread-count")
def get_unread_count(account: AuthAccount = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"unread": unread_count(db, account.id)}


@router.post("/read-all")
def mark_all_read(account: AuthAccount = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"updated": mark_all_notifications_read(db, account.id)}


@router.post("/{notification_id}/read")
def mark_read(
    notification_id: int,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"updated": mark_notification_read(db, account.id, notification_id)}


@router.delete("/{notification_id}")
def remove_notification(
    notification_id: int,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"deleted": delete_notification(db, account.id, notification_id)}


@router.post("/permission")
def ask_permission(
    payload: PermissionRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    granted = request_permission(db, profile, prompt=lambda: payload.response.value)
    return {"granted": granted, "permission": profile.notification_permission.value}


@router.put("/push-token")
def set_push_token(
    payload: PushTokenRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    register_push_token(db, profile, payload.token)
    return {"supported": profile.push_token is not None}
