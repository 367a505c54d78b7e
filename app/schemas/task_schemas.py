# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, time


class TaskCreateRequest(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    due_time: Optional[time] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Title is required.")
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if v else v


class TaskUpdateRequest(BaseModel):
    # Only the fields sent are changed
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    due_time: Optional[time] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title is required.")
        return v.strip() if v else v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if v else v
