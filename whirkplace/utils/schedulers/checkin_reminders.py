# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from datetime import date
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from whirkplace.models.checkin import Checkin
from whirkplace.models.database import SessionLocal
from whirkplace.models.user import User
from whirkplace.models.vacation import Vacation
from whirkplace.services.review_notifier import deliver_notification
from whirkplace.utils.week_utils import canonical_week_of, format_week_ending_label, today_in_checkin_tz

logger = logging.getLogger("reminders")


def users_needing_reminder(db: Session, week_of: date):
    submitted = select(Checkin.user_id).where(Checkin.week_of == week_of)
    vacationing = select(Vacation.user_id).where(Vacation.week_of == week_of)
    return (
        db.query(User)
        .filter(
            User.is_active == True,
            ~User.id.in_(submitted),
            ~User.id.in_(vacationing),
        )
        .order_by(User.id)
        .all()
    )


def send_checkin_reminders(today: Optional[date] = None, db: Optional[Session] = None) -> dict:
    """
    Weekly job: nudges every active user who has not checked in for the current
    week and is not on vacation. One failing user never stops the rest.
    """
    owns_session = db is None
    db = db or SessionLocal()
    week_of = canonical_week_of(today or today_in_checkin_tz())
    result = {"week_of": week_of.isoformat(), "reminders_sent": 0, "errors": 0}

    try:
        users = users_needing_reminder(db, week_of)
        logger.info(f"⏰ {len(users)} users need a check-in reminder for week of {week_of}")

        text = f"Your weekly check-in is due ({format_week_ending_label(week_of)}). It only takes a minute!"
        for user in users:
            try:
                deliver_notification(
                    db,
                    user,
                    notification_type="checkin_reminder",
                    text=text,
                    title="📝 Weekly check-in",
                )
                result["reminders_sent"] += 1
            except Exception as e:
                db.rollback()
                result["errors"] += 1
                logger.error(f"🛑 Reminder failed for user {user.id}: {e}", exc_info=True)

        logger.info(f"✅ Reminders done: {result['reminders_sent']} sent, {result['errors']} errors")
    finally:
        if owns_session:
            db.close()

    return result
