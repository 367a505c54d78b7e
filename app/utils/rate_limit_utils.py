# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import RATE_LIMIT_ENABLED, AUTH_RATE_LIMIT

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

# Applied to register/login only; everything else sits behind a bearer token
auth_rate_limit = limiter.limit(AUTH_RATE_LIMIT)
