# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from whirkplace.models.database import get_db
from whirkplace.models.notification import NotificationLog
from whirkplace.models.user import User
from whirkplace.utils.auth_utils import get_current_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/recent")
def get_recent_notifications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    limit: int = Query(10, ge=1, le=100)
):
    logs = (
        db.query(NotificationLog)
        .filter(NotificationLog.user_id == user.id)
        .order_by(NotificationLog.timestamp.desc(), NotificationLog.id.desc())
        .limit(limit)
        .all()
    )

    return [
        {
            "id": log.id,
            "type": log.notification_type,
            "checkin_id": log.checkin_id,
            "text": log.content,  # Already decrypted automatically
            "delivered": log.delivered,
            "timestamp": log.timestamp.isoformat()
        }
        for log in logs
    ]
