# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Optional
from pytz import timezone, UnknownTimeZoneError
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from app.config import ADMIN_EMAILS
from app.models.account import AuthAccount
from app.models.profile import Profile, Role

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """Rejected sign-up or settings change; the message is shown to the user."""


def _normalise_email(email: str) -> str:
    return email.strip().lower()


def register_account(db: Session, email: str, username: str, password: str) -> AuthAccount:
    email = _normalise_email(email)
    if db.query(AuthAccount).filter(AuthAccount.email == email).first():
        raise AccountError("User already registered")

    account = AuthAccount(email=email, password_hash=generate_password_hash(password))
    account.profile = Profile(
        username=username.strip(),
        email=email,
        role=Role.admin if email in ADMIN_EMAILS else Role.user,
    )
    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info(f"👤 Registered {account.id} ({account.profile.role.value})")
    return account


def authenticate(db: Session, email: str, password: str) -> Optional[AuthAccount]:
    account = db.query(AuthAccount).filter(AuthAccount.email == _normalise_email(email)).first()
    if not account or not check_password_hash(account.password_hash, password):
        return None
    return account


def update_settings(
    db: Session,
    account: AuthAccount,
    username: Optional[str] = None,
    new_password: Optional[str] = None,
    tz_name: Optional[str] = None,
) -> AuthAccount:
    """Username and timezone live on the profile, the password on the account."""
    if tz_name:
        try:
            timezone(tz_name)
        except UnknownTimeZoneError:
            raise AccountError(f"Unknown timezone: {tz_name}")

    if account.profile:
        if username:
            account.profile.username = username.strip()
        if tz_name:
            account.profile.timezone = tz_name

    # Blank keeps the current password
    if new_password and new_password.strip():
        account.password_hash = generate_password_hash(new_password)

    db.commit()
    db.refresh(account)
    return account


def display_name(account: AuthAccount) -> str:
    if account.profile and account.profile.username:
        return account.profile.username
    return account.email or "Unknown"
