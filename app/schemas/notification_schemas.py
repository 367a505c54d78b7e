# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional
from app.models.profile import NotificationPermission


class PermissionRequest(BaseModel):
    # What the device answered when asked; only consulted while the state is "default"
    response: NotificationPermission


class PushTokenRequest(BaseModel):
    token: Optional[str] = None
