# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whirkplace.models.checkin import Checkin, ReviewStatus
from whirkplace.models.user import User, UserRole
from whirkplace.models.vacation import Vacation
from whirkplace.schemas.checkin_schemas import MissingCheckinOut, SubmissionWindow
from whirkplace.services.question_service import get_active_questions
from whirkplace.services.submission_window import (
    DEFAULT_LOOKBACK_WEEKS,
    calculate_submission_window,
    is_week_open,
)
from whirkplace.services.vacation_service import is_user_on_vacation
from whirkplace.utils.errors import DuplicateSubmissionError, ValidationError
from whirkplace.utils.week_utils import (
    DateLike,
    canonical_week_of,
    due_date,
    is_submitted_on_time,
    parse_date,
    review_due_date,
    today_in_checkin_tz,
)

logger = logging.getLogger(__name__)

MIN_MOOD = 1
MAX_MOOD = 5


def _validate_mood(overall_mood) -> int:
    if isinstance(overall_mood, bool) or not isinstance(overall_mood, int):
        raise ValidationError("Mood must be a whole number between 1 and 5.")
    if not (MIN_MOOD <= overall_mood <= MAX_MOOD):
        raise ValidationError("Mood must be between 1 and 5.")
    return overall_mood


def _validate_responses(responses: Dict[str, str], questions) -> Dict[str, str]:
    if not responses:
        raise ValidationError("Please answer the check-in questions.")

    cleaned = {str(k): (v or "").strip() for k, v in responses.items()}
    known_ids = {str(q.id) for q in questions}

    unknown = sorted(set(cleaned) - known_ids)
    if unknown:
        raise ValidationError(f"Unknown question(s): {', '.join(unknown)}")

    missing = [str(q.id) for q in questions if not cleaned.get(str(q.id))]
    if missing:
        raise ValidationError(f"Please answer all questions. Missing: {', '.join(missing)}")

    return cleaned


def _submitted_weeks(db: Session, user_id: int) -> List:
    return [row.week_of for row in db.query(Checkin.week_of).filter(Checkin.user_id == user_id).all()]


def _account_start(user: User) -> Optional[date]:
    # created_at is stored as naive UTC; read it on the check-in calendar
    return today_in_checkin_tz(user.created_at) if user.created_at else None


def submit_checkin(
    db: Session,
    user: User,
    overall_mood: int,
    responses: Dict[str, str],
    week_of: Optional[DateLike] = None,
    winning_next_week: Optional[str] = None,
    today: Optional[DateLike] = None,
    now: Optional[datetime] = None,
    lookback: int = DEFAULT_LOOKBACK_WEEKS,
) -> Checkin:
    """
    Records a user's check-in for the current week or one of the open late weeks.
    ``week_of`` may be any day of the target week; it is stored as that week's Friday.
    """
    now = now or datetime.utcnow()
    today = parse_date(today) if today is not None else today_in_checkin_tz(now)
    target = canonical_week_of(week_of) if week_of is not None else canonical_week_of(today)

    # 1️⃣ Validate the payload before touching storage
    _validate_mood(overall_mood)
    questions = get_active_questions(db)
    cleaned = _validate_responses(responses, questions)

    # 2️⃣ One check-in per week
    existing = (
        db.query(Checkin)
        .filter(Checkin.user_id == user.id, Checkin.week_of == target)
        .first()
    )
    if existing:
        raise DuplicateSubmissionError()

    # 3️⃣ Week must be the current one or within the late window.
    # Only the bounds matter here, duplicates are settled above and by the unique constraint
    if not is_week_open(target, (), today, lookback, account_created=_account_start(user)):
        raise ValidationError(
            f"Check-ins can only be submitted for the current week or the last {lookback} weeks."
        )

    checkin = Checkin(
        user_id=user.id,
        week_of=target,
        overall_mood=overall_mood,
        responses=cleaned,
        question_snapshots={str(q.id): q.text for q in questions},
        winning_next_week=(winning_next_week or "").strip() or None,
        due_date=due_date(target),
        review_due_date=review_due_date(target),
        submitted_at=now,
        submitted_on_time=is_submitted_on_time(now, target),
        review_status=ReviewStatus.PENDING,
        response_comments={},
        response_flags={},
    )
    db.add(checkin)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent submission for the same week
        db.rollback()
        logger.info(f"⏭️ Duplicate check-in for user {user.id} week of {target}")
        raise DuplicateSubmissionError()

    db.refresh(checkin)
    logger.info(
        f"✅ Check-in {checkin.id} saved for user {user.id} week of {target} "
        f"({'on time' if checkin.submitted_on_time else 'late'})"
    )
    return checkin


def get_checkins_for_user(db: Session, user_id: int):
    return (
        db.query(Checkin)
        .filter(Checkin.user_id == user_id)
        .order_by(Checkin.week_of.desc())
        .all()
    )


def get_current_week_checkin(db: Session, user_id: int, today: Optional[DateLike] = None):
    week_of = canonical_week_of(today if today is not None else today_in_checkin_tz())
    return (
        db.query(Checkin)
        .filter(Checkin.user_id == user_id, Checkin.week_of == week_of)
        .first()
    )


def get_submission_window(
    db: Session,
    user: User,
    today: Optional[DateLike] = None,
    lookback: int = DEFAULT_LOOKBACK_WEEKS,
) -> SubmissionWindow:
    today = parse_date(today) if today is not None else today_in_checkin_tz()
    return calculate_submission_window(
        _submitted_weeks(db, user.id),
        today,
        lookback=lookback,
        account_created=_account_start(user),
        on_vacation=is_user_on_vacation(db, user.id, today),
    )


def users_in_scope(db: Session, reviewer: User):
    query = db.query(User).filter(User.is_active == True, User.id != reviewer.id)
    if reviewer.role == UserRole.admin:
        return query.order_by(User.name).all()
    if reviewer.role == UserRole.manager:
        return query.filter(User.manager_id == reviewer.id).order_by(User.name).all()
    return []


def get_missing_checkins(db: Session, reviewer: User, today: Optional[DateLike] = None) -> List[MissingCheckinOut]:
    """Users the reviewer looks after who have not checked in this week."""
    week_of = canonical_week_of(today if today is not None else today_in_checkin_tz())

    users = users_in_scope(db, reviewer)
    if not users:
        return []
    user_ids = [u.id for u in users]

    submitted = {
        row.user_id
        for row in db.query(Checkin.user_id)
        .filter(Checkin.user_id.in_(user_ids), Checkin.week_of == week_of)
        .all()
    }
    on_vacation = {
        row.user_id
        for row in db.query(Vacation.user_id)
        .filter(Vacation.user_id.in_(user_ids), Vacation.week_of == week_of)
        .all()
    }

    return [
        MissingCheckinOut(
            user_id=u.id,
            name=u.name or "",
            email=u.email,
            week_of=week_of,
            on_vacation=u.id in on_vacation,
        )
        for u in users
        if u.id not in submitted
    ]
