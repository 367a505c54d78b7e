# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user
from app.models.account import AuthAccount
from app.schemas.auth_schemas import RegisterRequest, LoginRequest, AccountSettingsRequest
from app.services import audit_logger
from app.services.account_service import (
    AccountError,
    register_account,
    authenticate,
    update_settings,
    display_name,
)
from app.services.dashboard_session import dashboard_sessions
from app.services.view_model import ViewModel
from app.utils.jwt_utils import create_access_token
from app.utils.rate_limit_utils import auth_rate_limit

router = APIRouter(prefix="/auth", tags=["Auth"])


def serialize_account(account: AuthAccount) -> dict:
    profile = account.profile
    return {
        "id": account.id,
        "email": account.email,
        "username": profile.username if profile else None,
        "role": profile.role.value if profile else None,
        "timezone": profile.timezone if profile else None,
        "notification_permission": profile.notification_permission.value if profile else None,
        "created_at": account.created_at.isoformat() if account.created_at else None,
    }


@router.post("/register", status_code=201)
@auth_rate_limit
def register(request: Request, payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        account = register_account(db, payload.email, payload.username, payload.password)
    except AccountError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "message": "Registration successful! You can now sign in.",
        "user": serialize_account(account)
    }


@router.post("/login")
@auth_rate_limit
def login(
    request: Request,
    payload: LoginRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db)
):
    account = authenticate(db, payload.email, payload.password)
    if not account:
        raise HTTPException(status_code=400, detail="Invalid login credentials")

    token = create_access_token({"sub": account.id})
    background_tasks.add_task(audit_logger.log_login, account.id, display_name(account))

    role = account.profile.role if account.profile else None
    return {
        "access_token": token,
        "token_type": "bearer",
        "role": role.value if role else None,
        "view": ViewModel.entered_as(role).state.value if role else "landing",
        "user": serialize_account(account)
    }


@router.post("/logout")
def logout(background_tasks: BackgroundTasks, account: AuthAccount = Depends(get_current_user)):
    # Tokens are stateless; signing out closes dashboards and leaves a trail
    dashboard_sessions.unmount_user(account.id)
    background_tasks.add_task(audit_logger.log_logout, account.id, display_name(account))
    return {"status": "signed_out"}


@router.get("/me")
def me(account: AuthAccount = Depends(get_current_user)):
    return serialize_account(account)


@router.put("/settings")
def save_settings(
    payload: AccountSettingsRequest,
    account: AuthAccount = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        account = update_settings(
            db,
            account,
            username=payload.username,
            new_password=payload.new_password,
            tz_name=payload.timezone,
        )
    except AccountError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"message": "Saved successfully.", "user": serialize_account(account)}
