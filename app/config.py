# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import os

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> list:
    raw = os.getenv(name, "")
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


# 🗄️ Database (Supabase pooler URL in production, local SQLite otherwise)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskpulse.db")

# 🔐 Auth
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
ADMIN_EMAILS = _env_list("ADMIN_EMAILS")

# ⏱️ Rate limiting on register/login
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")

# 🕒 Calendar + polling cadence
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
REMINDER_INTERVAL_SECONDS = int(os.getenv("REMINDER_INTERVAL_SECONDS", "60"))
UNREAD_REFRESH_SECONDS = int(os.getenv("UNREAD_REFRESH_SECONDS", "30"))
# Dashboards nobody has polled for this long are unmounted by the sweep
DASHBOARD_IDLE_SECONDS = int(os.getenv("DASHBOARD_IDLE_SECONDS", "300"))
DASHBOARD_SWEEP_SECONDS = int(os.getenv("DASHBOARD_SWEEP_SECONDS", "60"))

# 📲 Native push (inline JSON or a path to the service account file)
FIREBASE_ADMIN_JSON = os.getenv("FIREBASE_ADMIN_JSON")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
