# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Mounted dashboards and their timers.

Mounting a dashboard runs a reminder check straight away, then keeps two
interval jobs alive on the shared scheduler until it is unmounted:

- reminder check, every REMINDER_INTERVAL_SECONDS (60 s)
- unread-count refresh, every UNREAD_REFRESH_SECONDS (30 s)

Admin dashboards get the view model but no timers. Unmounting removes the
jobs; a check that is already running is left to finish. A dashboard is also
unmounted when its view goes back to landing, when its user signs out or is
deleted, and when it has not been polled for DASHBOARD_IDLE_SECONDS.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional
from apscheduler.jobstores.base import JobLookupError
from apscheduler.triggers.interval import IntervalTrigger

from app.config import DASHBOARD_IDLE_SECONDS, REMINDER_INTERVAL_SECONDS, UNREAD_REFRESH_SECONDS
from app.models.database import SessionLocal
from app.models.profile import Role
from app.services.notification_service import unread_count
from app.services.reminder_checker import run_reminder_check
from app.services.view_model import ViewModel, ViewState
from app.utils.schedulers.scheduler import scheduler

logger = logging.getLogger(__name__)


def job_ids(session_id: str):
    return (f"reminders:{session_id}", f"unread:{session_id}")


@dataclass
class DashboardSession:
    session_id: str
    user_id: str
    role: Role
    view: ViewModel
    unread_count: int = 0
    mounted_at: datetime = field(default_factory=datetime.utcnow)
    last_seen: datetime = field(default_factory=datetime.utcnow)


class DashboardSessionRegistry:
    def __init__(self, scheduler, reminder_interval: int = REMINDER_INTERVAL_SECONDS,
                 unread_interval: int = UNREAD_REFRESH_SECONDS, idle_timeout: int = DASHBOARD_IDLE_SECONDS):
        self._scheduler = scheduler
        self._reminder_interval = reminder_interval
        self._unread_interval = unread_interval
        self._idle_timeout = timedelta(seconds=idle_timeout)
        self._sessions: Dict[str, DashboardSession] = {}
        self._lock = threading.Lock()

    def mount(self, user_id: str, role: Role) -> DashboardSession:
        session = DashboardSession(
            session_id=uuid.uuid4().hex,
            user_id=user_id,
            role=role,
            view=ViewModel.entered_as(role),
        )
        with self._lock:
            self._sessions[session.session_id] = session

        if role != Role.admin:
            run_reminder_check(user_id)

            reminders_job, unread_job = job_ids(session.session_id)
            self._scheduler.add_job(
                run_reminder_check,
                trigger=IntervalTrigger(seconds=self._reminder_interval),
                args=[user_id],
                id=reminders_job,
                replace_existing=True,
            )
            self._scheduler.add_job(
                self.refresh_unread_count,
                trigger=IntervalTrigger(seconds=self._unread_interval),
                args=[session.session_id],
                id=unread_job,
                replace_existing=True,
            )

        self.refresh_unread_count(session.session_id)
        logger.info(f"🖥️ Dashboard {session.session_id} mounted for {user_id}")
        return session

    def unmount(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if not session:
            return False

        for job_id in job_ids(session.session_id):
            try:
                self._scheduler.remove_job(job_id)
            except JobLookupError:
                pass  # admin session or already gone

        logger.info(f"🖥️ Dashboard {session_id} unmounted")
        return True

    def unmount_user(self, user_id: str) -> int:
        """Unmounts every dashboard the user has open. Returns how many went."""
        with self._lock:
            owned = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
        return sum(1 for sid in owned if self.unmount(sid))

    def sweep_idle(self, now: Optional[datetime] = None) -> int:
        """Unmounts dashboards nobody has polled within the idle timeout."""
        cutoff = (now or datetime.utcnow()) - self._idle_timeout
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff]

        swept = sum(1 for sid in stale if self.unmount(sid))
        if swept:
            logger.info(f"🧹 Swept {swept} idle dashboard(s)")
        return swept

    def get(self, session_id: str, user_id: str) -> Optional[DashboardSession]:
        # Any owner lookup counts as the client still being there
        with self._lock:
            session = self._sessions.get(session_id)
            if session and session.user_id == user_id:
                session.last_seen = datetime.utcnow()
                return session
        return None

    def navigate(self, session: DashboardSession, target) -> ViewState:
        state = session.view.navigate(target)
        if state == ViewState.LANDING:
            self.unmount(session.session_id)
        return state

    def refresh_unread_count(self, session_id: str) -> Optional[int]:
        with self._lock:
            session = self._sessions.get(session_id)
        if not session:
            return None

        db = SessionLocal()
        try:
            count = unread_count(db, session.user_id)
        finally:
            db.close()

        with self._lock:
            session.unread_count = count
        return count

    def has_timers(self, session_id: str) -> bool:
        return all(self._scheduler.get_job(job_id) is not None for job_id in job_ids(session_id))

    def __len__(self):
        with self._lock:
            return len(self._sessions)


dashboard_sessions = DashboardSessionRegistry(scheduler)
