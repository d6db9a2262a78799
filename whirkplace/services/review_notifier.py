# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from sqlalchemy.orm import Session
from whirkplace.models.checkin import Checkin
from whirkplace.models.database import SessionLocal
from whirkplace.models.notification import NotificationLog
from whirkplace.models.user import User
from whirkplace.utils.firebase import send_fcm_push
from whirkplace.utils.week_utils import format_week_ending_label

logger = logging.getLogger(__name__)


def build_review_message(checkin: Checkin, reviewer: User = None) -> str:
    who = reviewer.name if reviewer and reviewer.name else "Your manager"
    return f"{who} reviewed your check-in ({format_week_ending_label(checkin.week_of)}): {checkin.review_comments}"


def deliver_notification(db: Session, user: User, notification_type: str, text: str,
                         title: str, checkin_id: int = None) -> NotificationLog:
    """
    Stores the in-app notification, then tries a push. A failed push is logged
    and leaves the in-app record with delivered=False.
    """
    log = NotificationLog(
        user_id=user.id,
        notification_type=notification_type,
        checkin_id=checkin_id,
        content=text,
        delivered=False,
    )
    db.add(log)
    db.commit()

    if user.fcm_token and user.push_notifications_enabled:
        try:
            message_id = send_fcm_push(
                token=user.fcm_token,
                title=title,
                body=text,
                data={"screen": "checkins", "type": notification_type, "checkin_id": checkin_id or ""},
            )
            if message_id:
                log.delivered = True
                db.commit()
                logger.info(f"📲 Push sent to user {user.id} ({notification_type})")
        except Exception as e:
            logger.warning(f"⚠️ FCM push failed for user {user.id}: {e}")

    db.refresh(log)
    return log


def notify_checkin_reviewed(checkin_id: int):
    """
    Fire-and-forget notice to the check-in author. Runs after the review is
    committed, with its own session; nothing raised here reaches the reviewer.
    """
    db: Session = SessionLocal()
    try:
        checkin = db.get(Checkin, checkin_id)
        if not checkin or not checkin.user:
            logger.warning(f"⚠️ Review notification skipped, check-in {checkin_id} not found")
            return

        text = build_review_message(checkin, checkin.reviewer)
        deliver_notification(
            db,
            checkin.user,
            notification_type="checkin_reviewed",
            text=text,
            title="✅ Check-in reviewed",
            checkin_id=checkin.id,
        )
        logger.info(f"🔔 Review notification stored for user {checkin.user_id} (check-in {checkin_id})")

    except Exception as e:
        db.rollback()
        logger.error(f"🛑 Review notification failed for check-in {checkin_id}: {e}", exc_info=True)
    finally:
        db.close()
