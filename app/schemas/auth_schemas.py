# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, field_validator, model_validator
from typing import Optional


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str
    confirm_password: str

    @model_validator(mode="after")
    def check_form(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        if len(self.username.strip()) < 3:
            raise ValueError("Username must be at least 3 characters.")
        return self

    @field_validator("email")
    @classmethod
    def email_looks_valid(cls, v):
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Enter a valid email address.")
        return v.strip()


class LoginRequest(BaseModel):
    email: str
    password: str


class AccountSettingsRequest(BaseModel):
    username: Optional[str] = None
    new_password: Optional[str] = None  # blank keeps the current password
    timezone: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_length(cls, v):
        if v is not None and len(v.strip()) < 3:
            raise ValueError("Username must be at least 3 characters.")
        return v
