# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends, HTTPException

from app.auth import get_current_profile
from app.models.profile import Profile
from app.schemas.dashboard_schemas import NavigateRequest
from app.services.dashboard_session import dashboard_sessions, DashboardSession

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def serialize_session(session: DashboardSession) -> dict:
    return {
        "session_id": session.session_id,
        "view": session.view.state.value,
        "task_section": session.view.task_section,
        "unread_count": session.unread_count,
        "mounted_at": session.mounted_at.isoformat(),
    }


def _owned_session(session_id: str, profile: Profile) -> DashboardSession:
    session = dashboard_sessions.get(session_id, profile.id)
    if not session:
        raise HTTPException(status_code=404, detail="Dashboard session not found")
    return session


@router.post("/mount", status_code=201)
def mount_dashboard(profile: Profile = Depends(get_current_profile)):
    session = dashboard_sessions.mount(profile.id, profile.role)
    return serialize_session(session)


@router.get("/{session_id}")
def get_dashboard(session_id: str, profile: Profile = Depends(get_current_profile)):
    return serialize_session(_owned_session(session_id, profile))


@router.post("/{session_id}/navigate")
def navigate(session_id: str, payload: NavigateRequest, profile: Profile = Depends(get_current_profile)):
    # InvalidTransition is turned into a 409 by the app-level handler; landing unmounts
    session = _owned_session(session_id, profile)
    dashboard_sessions.navigate(session, payload.view)
    return serialize_session(session)


@router.post("/{session_id}/unmount")
def unmount_dashboard(session_id: str, profile: Profile = Depends(get_current_profile)):
    _owned_session(session_id, profile)
    dashboard_sessions.unmount(session_id)
    return {"status": "unmounted"}
