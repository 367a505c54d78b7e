# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import functools
import logging


def best_effort(label: str, default=None):
    """
    Marks a side effect as best-effort and non-blocking for its caller.

    Any exception raised by the wrapped function is logged with a traceback
    and swallowed; the caller receives `default` instead (called first if it
    is a factory such as `list`). Used for audit writes and native pushes,
    which must never fail the user action they accompany.
    """
    def decorator(func):
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"🛑 {label} failed: {e}", exc_info=True)
                return default() if callable(default) else default

        return wrapper

    return decorator
