# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from whirkplace.models import database
from whirkplace.models import *  # registers all models

from whirkplace.routers import checkin_router, comment_router, question_router
from whirkplace.routers import vacation_router, notifications_router, healthz_router

from whirkplace.utils.errors import CheckinError
from whirkplace.utils.rate_limit_utils import limiter
from whirkplace.utils.schedulers.checkin_reminders import send_checkin_reminders
from whirkplace.utils.week_utils import checkin_tz

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

CHECKIN_REMINDER_DAY = os.getenv("CHECKIN_REMINDER_DAY", "fri")
CHECKIN_REMINDER_HOUR = int(os.getenv("CHECKIN_REMINDER_HOUR", "9"))
SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "true").lower() != "false"


# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)

# Scheduler setup
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60})

@asynccontextmanager
async def lifespan(app: FastAPI):
    if not SCHEDULER_ENABLED:
        yield
        return

    # 📝 Weekly check-in reminder in the check-in timezone
    scheduler.add_job(
        send_checkin_reminders,
        CronTrigger(day_of_week=CHECKIN_REMINDER_DAY, hour=CHECKIN_REMINDER_HOUR, minute=0, timezone=checkin_tz),
        id="weekly_checkin_reminders",
        replace_existing=True,
    )

    scheduler.start()
    logger.info(f"⏰ Reminder scheduler started ({CHECKIN_REMINDER_DAY} {CHECKIN_REMINDER_HOUR}:00 {checkin_tz.zone})")
    yield
    scheduler.shutdown()

# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Whirkplace API",
    description="Weekly team check-ins and manager reviews",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(checkin_router.router)
app.include_router(comment_router.router)
app.include_router(question_router.router)
app.include_router(vacation_router.router)
app.include_router(notifications_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLERS ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )

@app.exception_handler(CheckinError)
async def checkin_error_handler(request: Request, exc: CheckinError):
    # Business errors become toast/banner text on the client
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message}
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to Whirkplace - team check-ins backend"}

@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
