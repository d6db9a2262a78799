# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Reporting-week arithmetic.

A reporting week runs Saturday through Friday and is identified by its Friday
(``week_of``). All comparisons are by calendar date in the check-in timezone,
never by wall-clock instant.
"""

import os
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz

from whirkplace.utils.errors import InvalidDateError

CHECKIN_TIMEZONE = os.getenv("CHECKIN_TIMEZONE", "America/Chicago")
checkin_tz = pytz.timezone(CHECKIN_TIMEZONE)

FRIDAY = 4  # date.weekday()
DAYS_PER_WEEK = 7

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """
    Turns a date, datetime or ISO string into a calendar date.
    Aware datetimes are read in the check-in timezone, naive ones at face value.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(checkin_tz).date()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDateError("Date is empty.")
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return parse_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            raise InvalidDateError(f"Invalid date '{value}'. Use YYYY-MM-DD.")
    raise InvalidDateError(f"Unsupported date value: {value!r}")


def canonical_week_of(value: DateLike) -> date:
    """Friday of the Saturday..Friday week containing ``value``."""
    day = parse_date(value)
    return day + timedelta(days=(FRIDAY - day.weekday()) % DAYS_PER_WEEK)


def week_start(value: DateLike) -> date:
    """Saturday opening the week."""
    return canonical_week_of(value) - timedelta(days=DAYS_PER_WEEK - 1)


def week_end(value: DateLike) -> date:
    """Exclusive end of the week (the next Saturday)."""
    return canonical_week_of(value) + timedelta(days=1)


def due_date(week_of: DateLike) -> date:
    # On-time means submitted by the end of the canonical Friday
    return canonical_week_of(week_of)


def today_in_checkin_tz(now: Optional[datetime] = None) -> date:
    now = now or datetime.now(pytz.utc)
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(checkin_tz).date()


def is_submitted_on_time(submitted_at: Optional[datetime], week_of: DateLike) -> bool:
    # Timestamps are stored as naive UTC
    if submitted_at is None:
        return False
    return today_in_checkin_tz(submitted_at) <= due_date(week_of)


def format_week_ending_label(value: DateLike) -> str:
    friday = canonical_week_of(value)
    return f"Week ending {friday:%b} {friday.day}, {friday.year}"


def review_due_date(week_of: DateLike) -> date:
    # Reviews share the check-in deadline of their week
    return due_date(week_of)


def is_reviewed_on_time(reviewed_at: Optional[datetime], review_due: Optional[date]) -> bool:
    if reviewed_at is None or review_due is None:
        return False
    return today_in_checkin_tz(reviewed_at) <= review_due
