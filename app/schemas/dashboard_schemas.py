# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel


class NavigateRequest(BaseModel):
    view: str  # e.g. "dashboard/finished", "admin/audit_logs"
