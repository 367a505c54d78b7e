# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Screen state for a dashboard session, as an explicit state machine.

    landing --enter(user)--> dashboard/active
    landing --enter(admin)--> admin/home
    <any area view> --navigate(view)--> <view allowed for the role>
    <any> --leave()--> landing
"""

import enum
from typing import Optional

from app.models.profile import Role


class ViewState(str, enum.Enum):
    LANDING = "landing"
    DASHBOARD_ACTIVE = "dashboard/active"
    DASHBOARD_FINISHED = "dashboard/finished"
    DASHBOARD_ARCHIVED = "dashboard/archived"
    DASHBOARD_NOTIFICATIONS = "dashboard/notifications"
    DASHBOARD_SETTINGS = "dashboard/settings"
    DASHBOARD_USERS = "dashboard/users"
    ADMIN_HOME = "admin/home"
    ADMIN_USERS = "admin/users"
    ADMIN_SETTINGS = "admin/settings"
    ADMIN_AUDIT_LOGS = "admin/audit_logs"


class InvalidTransition(Exception):
    def __init__(self, current: ViewState, target, role: Optional[Role]):
        self.current = current
        self.target = target
        self.role = role
        role_name = role.value if role else "anonymous"
        target_name = target.value if isinstance(target, ViewState) else target
        super().__init__(f"Cannot go from {current.value} to {target_name} as {role_name}")


ALLOWED_VIEWS = {
    Role.user: frozenset({
        ViewState.DASHBOARD_ACTIVE,
        ViewState.DASHBOARD_FINISHED,
        ViewState.DASHBOARD_ARCHIVED,
        ViewState.DASHBOARD_NOTIFICATIONS,
        ViewState.DASHBOARD_SETTINGS,
    }),
    Role.admin: frozenset({
        ViewState.ADMIN_HOME,
        ViewState.ADMIN_USERS,
        ViewState.ADMIN_SETTINGS,
        ViewState.ADMIN_AUDIT_LOGS,
        ViewState.DASHBOARD_USERS,
    }),
}

HOME_VIEW = {
    Role.user: ViewState.DASHBOARD_ACTIVE,
    Role.admin: ViewState.ADMIN_HOME,
}

# Views that render a task list, and which section they show
TASK_SECTIONS = {
    ViewState.DASHBOARD_ACTIVE: "active",
    ViewState.DASHBOARD_FINISHED: "finished",
    ViewState.DASHBOARD_ARCHIVED: "archived",
}


class ViewModel:
    def __init__(self):
        self.state = ViewState.LANDING
        self.role: Optional[Role] = None

    @classmethod
    def entered_as(cls, role: Role) -> "ViewModel":
        view = cls()
        view.enter(role)
        return view

    def enter(self, role: Role) -> ViewState:
        if self.state != ViewState.LANDING:
            raise InvalidTransition(self.state, HOME_VIEW[role], role)
        self.role = role
        self.state = HOME_VIEW[role]
        return self.state

    def navigate(self, target) -> ViewState:
        try:
            target = ViewState(target)
        except ValueError:
            raise InvalidTransition(self.state, target, self.role)

        if target == ViewState.LANDING:
            return self.leave()
        if self.role is None or target not in ALLOWED_VIEWS[self.role]:
            raise InvalidTransition(self.state, target, self.role)

        self.state = target
        return self.state

    def leave(self) -> ViewState:
        self.state = ViewState.LANDING
        self.role = None
        return self.state

    @property
    def task_section(self) -> Optional[str]:
        return TASK_SECTIONS.get(self.state)
