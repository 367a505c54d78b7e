# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.models.database import SessionLocal
from app.utils.firebase import push_configured
from app.utils.schedulers.scheduler import scheduler
from app.services.dashboard_session import dashboard_sessions

router = APIRouter(tags=["Infra"])


@router.get("/healthz")
def health_check():
    db: Session = SessionLocal()
    result = {
        "db_connection": False,
        "scheduler_running": scheduler.running,
        "native_push": push_configured(),
    }

    try:
        # ✅ Check DB read
        db.execute(text("SELECT 1"))
        result["db_connection"] = True

        return {
            "status": "ok" if result["db_connection"] and result["scheduler_running"] else "partial",
            "mounted_dashboards": len(dashboard_sessions),
            "details": result
        }

    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "details": result
        }

    finally:
        db.close()
