# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, field_validator


class RenameUserRequest(BaseModel):
    username: str

    @field_validator("username")
    @classmethod
    def username_length(cls, v):
        if len(v.strip()) < 3:
            raise ValueError("Username must be at least 3 characters.")
        return v.strip()
