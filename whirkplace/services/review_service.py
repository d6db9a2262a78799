# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Manager review of submitted check-ins.

A check-in starts ``pending`` and moves to ``reviewed`` exactly once. The
approve/reject outcome is not a status of its own: it is carried as a tag at the
start of ``review_comments``.
"""

import logging
from datetime import datetime
from typing import Dict, Optional, Union

from sqlalchemy import false, update
from sqlalchemy.orm import Session

from whirkplace.models.checkin import Checkin, ReviewOutcome, ReviewStatus
from whirkplace.models.user import User, UserRole
from whirkplace.schemas.checkin_schemas import ResponseFlag
from whirkplace.utils.errors import AlreadyReviewedError, CheckinNotFoundError, ValidationError
from whirkplace.utils.week_utils import is_reviewed_on_time

logger = logging.getLogger(__name__)

MAX_REVIEW_COMMENT_LENGTH = 1000
MAX_RESPONSE_COMMENT_LENGTH = 500

DEFAULT_COMMENTS = {
    ReviewOutcome.APPROVE: "Approved",
    ReviewOutcome.REJECT: "Needs improvement",
}

OUTCOME_TAGS = {
    ReviewOutcome.APPROVE: "[APPROVED]",
    ReviewOutcome.REJECT: "[NEEDS IMPROVEMENT]",
}


def normalize_review_comments(outcome: str, comments: Optional[str]) -> str:
    text = (comments or "").strip()
    if not text:
        return DEFAULT_COMMENTS[outcome]
    return f"{OUTCOME_TAGS[outcome]} {text}"


def validate_review(
    outcome: str,
    comments: Optional[str],
    response_comments: Optional[Dict[str, str]] = None,
):
    if outcome not in ReviewOutcome.ALL:
        raise ValidationError(f"Unknown review outcome '{outcome}'. Use 'approve' or 'reject'.")

    text = (comments or "").strip()
    if outcome == ReviewOutcome.REJECT and not text:
        raise ValidationError("A comment is required when asking for improvements.")
    if len(text) > MAX_REVIEW_COMMENT_LENGTH:
        raise ValidationError("Review comments too long.")

    for question_id, comment in (response_comments or {}).items():
        if len(comment or "") > MAX_RESPONSE_COMMENT_LENGTH:
            raise ValidationError(f"Response comment for question {question_id} too long.")


def _flag_value(flag: Union[ResponseFlag, dict]) -> dict:
    if isinstance(flag, dict):
        flag = ResponseFlag(**flag)
    return flag.model_dump()


def build_review_values(
    checkin: Checkin,
    reviewer_id: int,
    outcome: str,
    comments: Optional[str] = "",
    response_comments: Optional[Dict[str, str]] = None,
    response_flags: Optional[Dict[str, Union[ResponseFlag, dict]]] = None,
    now: Optional[datetime] = None,
) -> dict:
    """Column values for the pending -> reviewed transition. Does not touch ``checkin``."""
    if not checkin.is_pending:
        raise AlreadyReviewedError()

    merged_comments = dict(checkin.response_comments or {})
    merged_comments.update({str(k): v for k, v in (response_comments or {}).items()})

    # Full replace per question, the flag record is never merged field by field
    merged_flags = dict(checkin.response_flags or {})
    merged_flags.update({str(k): _flag_value(v) for k, v in (response_flags or {}).items()})

    reviewed_at = now or datetime.utcnow()
    return {
        "review_status": ReviewStatus.REVIEWED,
        "review_comments": normalize_review_comments(outcome, comments),
        "reviewed_at": reviewed_at,
        "reviewed_on_time": is_reviewed_on_time(reviewed_at, checkin.review_due_date),
        "reviewed_by": reviewer_id,
        "response_comments": merged_comments,
        "response_flags": merged_flags,
    }


def apply_review(
    checkin: Checkin,
    reviewer_id: int,
    outcome: str,
    comments: Optional[str] = "",
    response_comments: Optional[Dict[str, str]] = None,
    response_flags: Optional[Dict[str, Union[ResponseFlag, dict]]] = None,
    now: Optional[datetime] = None,
) -> Checkin:
    """In-memory transition. Validation runs before anything on the record changes."""
    validate_review(outcome, comments, response_comments)
    values = build_review_values(
        checkin, reviewer_id, outcome, comments, response_comments, response_flags, now
    )
    for field, value in values.items():
        setattr(checkin, field, value)
    return checkin


def review_checkin(
    db: Session,
    checkin_id: int,
    reviewer_id: int,
    outcome: str,
    comments: Optional[str] = "",
    response_comments: Optional[Dict[str, str]] = None,
    response_flags: Optional[Dict[str, Union[ResponseFlag, dict]]] = None,
    now: Optional[datetime] = None,
) -> Checkin:
    """
    Persists a review. The UPDATE only matches a still-pending row, so when two
    reviewers race the first commit wins and the second gets AlreadyReviewedError.
    Notifying the author is left to the caller.
    """
    validate_review(outcome, comments, response_comments)

    checkin = db.get(Checkin, checkin_id)
    if not checkin:
        raise CheckinNotFoundError()

    values = build_review_values(
        checkin, reviewer_id, outcome, comments, response_comments, response_flags, now
    )

    result = db.execute(
        update(Checkin)
        .where(Checkin.id == checkin_id, Checkin.review_status == ReviewStatus.PENDING)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.info(f"⏭️ Check-in {checkin_id} was reviewed concurrently, rejecting reviewer {reviewer_id}")
        raise AlreadyReviewedError()

    db.commit()
    db.refresh(checkin)
    logger.info(f"✅ Check-in {checkin_id} reviewed by {reviewer_id} ({outcome})")
    return checkin


def _scoped_checkins(db: Session, reviewer: User):
    query = db.query(Checkin).join(User, Checkin.user_id == User.id)
    if reviewer.role == UserRole.admin:
        return query
    if reviewer.role == UserRole.manager:
        return query.filter(User.manager_id == reviewer.id)
    return query.filter(false())


def list_pending_checkins(db: Session, reviewer: User):
    return list_checkins_by_review_status(db, reviewer, ReviewStatus.PENDING)


def list_checkins_by_review_status(db: Session, reviewer: User, status: str):
    if status not in ReviewStatus.ALL:
        raise ValidationError(f"Unknown review status '{status}'.")

    query = _scoped_checkins(db, reviewer).filter(Checkin.review_status == status)
    if status == ReviewStatus.REVIEWED:
        return query.order_by(Checkin.reviewed_at.desc()).all()
    return query.order_by(Checkin.created_at.desc(), Checkin.id.desc()).all()
