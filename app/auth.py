# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.utils.jwt_utils import verify_access_token
from app.models.database import SessionLocal
from app.models.account import AuthAccount
from app.models.profile import Profile

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")  # login takes JSON, this only drives the docs


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> AuthAccount:
    payload = verify_access_token(token)

    account = db.query(AuthAccount).filter(AuthAccount.id == payload.get("sub")).first()
    if not account:
        raise HTTPException(status_code=401, detail="❌ User not found")

    return account


def get_current_profile(account: AuthAccount = Depends(get_current_user)) -> Profile:
    if not account.profile:
        raise HTTPException(status_code=404, detail="❌ Profile not found")
    return account.profile


def require_admin(account: AuthAccount = Depends(get_current_user)) -> AuthAccount:
    if not account.profile or not account.profile.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return account
