# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import time

from app.utils.schedulers.cleanup.tracking_cleaner import delete_stale_tracking_rows


logger = logging.getLogger("cleanup")

def run_all_cleanups():
    logger.info("🧹 Starting all cleanup tasks...")

    cleanup_tasks = [
        ("NotificationTracking", delete_stale_tracking_rows),
    ]

    for name, func in cleanup_tasks:
        start = time.time()
        try:
            logger.info(f"🔹 Running cleanup: {name}")
            func()
            duration = round(time.time() - start, 2)
            logger.info(f"✅ Completed {name} cleanup in {duration} sec.")
        except Exception as e:
            logger.error(f"🛑 {name} cleanup failed: {e}", exc_info=True)

    logger.info("🎉 All cleanup jobs completed.")
