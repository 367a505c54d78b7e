# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

from apscheduler.schedulers.background import BackgroundScheduler

# Shared by the daily cleanup cron and the per-dashboard interval jobs.
# Started and stopped by the FastAPI lifespan in app.main.
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60, "coalesce": True})
