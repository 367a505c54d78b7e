# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pytz import timezone
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import DASHBOARD_SWEEP_SECONDS, DEFAULT_TIMEZONE, LOG_LEVEL
from app.models import database
from app.models import *  # registers all models

from app.routers import auth_router, task_router, notifications_router
from app.routers import dashboard_router, admin_router, healthz_router

from app.services.dashboard_session import dashboard_sessions
from app.services.view_model import InvalidTransition
from app.utils.rate_limit_utils import limiter
from app.utils.schedulers.run_all_cleanups import run_all_cleanups
from app.utils.schedulers.scheduler import scheduler

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # 🕛 Clean every day at 2 AM
    scheduler.add_job(
        run_all_cleanups, "cron", hour=2, minute=0,
        timezone=timezone(DEFAULT_TIMEZONE), id="daily_cleanups", replace_existing=True
    )

    # 🖥️ Unmount dashboards whose client went away without saying so
    scheduler.add_job(
        dashboard_sessions.sweep_idle, "interval", seconds=DASHBOARD_SWEEP_SECONDS,
        id="dashboard_sweep", replace_existing=True
    )

    scheduler.start()
    logger.info("⏱️ Scheduler started")
    yield
    scheduler.shutdown(wait=False)


# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Taskpulse API",
    description="Tasks, due-date reminders and audit trail",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(auth_router.router)
app.include_router(task_router.router)
app.include_router(notifications_router.router)
app.include_router(dashboard_router.router)
app.include_router(admin_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLERS ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.get("/")
def read_root():
    return {"message": "Welcome to Taskpulse - task & reminder backend Live"}


@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
