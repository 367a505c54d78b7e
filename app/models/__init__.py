# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from .account import AuthAccount
from .profile import Profile, Role, NotificationPermission
from .task import Task
from .notification import Notification
from .notification_tracking import NotificationTracking
from .audit_log import AuditLog
