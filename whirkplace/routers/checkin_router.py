# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from whirkplace.models.checkin import Checkin
from whirkplace.models.database import get_db
from whirkplace.models.user import User
from whirkplace.schemas.checkin_schemas import (
    CheckinOut,
    CheckinSubmitRequest,
    CommentOut,
    CommentRequest,
    MissingCheckinOut,
    ReviewRequest,
    SubmissionWindow,
)
from whirkplace.services import checkin_service, comment_service, review_service
from whirkplace.services.review_notifier import notify_checkin_reviewed
from whirkplace.utils.auth_utils import ensure_can_view_user, get_current_user, require_reviewer
from whirkplace.utils.errors import CheckinNotFoundError
from whirkplace.utils.rate_limit_utils import RATE_LIMIT_WRITE, limiter

router = APIRouter(prefix="/checkins", tags=["Checkins"])


def get_visible_checkin(db: Session, checkin_id: int, viewer: User) -> Checkin:
    checkin = db.get(Checkin, checkin_id)
    if not checkin:
        raise CheckinNotFoundError()
    ensure_can_view_user(viewer, checkin.user)
    return checkin


@router.get("/window", response_model=SubmissionWindow)
def my_submission_window(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Current week call-to-action plus the late weeks still open."""
    return checkin_service.get_submission_window(db, user)


@router.post("", response_model=CheckinOut, status_code=201)
@limiter.limit(RATE_LIMIT_WRITE)
def submit_checkin(
    request: Request,
    payload: CheckinSubmitRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return checkin_service.submit_checkin(
        db,
        user,
        overall_mood=payload.overall_mood,
        responses=payload.responses,
        week_of=payload.week_of,
        winning_next_week=payload.winning_next_week,
    )


@router.get("/pending", response_model=List[CheckinOut])
def pending_checkins(
    db: Session = Depends(get_db),
    reviewer: User = Depends(require_reviewer),
):
    return review_service.list_pending_checkins(db, reviewer)


@router.get("/review-status/{status}", response_model=List[CheckinOut])
def checkins_by_review_status(
    status: str,
    db: Session = Depends(get_db),
    reviewer: User = Depends(require_reviewer),
):
    return review_service.list_checkins_by_review_status(db, reviewer, status)


@router.get("/missing", response_model=List[MissingCheckinOut])
def missing_checkins(
    db: Session = Depends(get_db),
    reviewer: User = Depends(require_reviewer),
):
    return checkin_service.get_missing_checkins(db, reviewer)


@router.get("/user/{user_id}", response_model=List[CheckinOut])
def checkins_for_user(
    user_id: int,
    db: Session = Depends(get_db),
    viewer: User = Depends(get_current_user),
):
    owner = db.get(User, user_id)
    if not owner:
        raise HTTPException(status_code=404, detail="User not found")
    ensure_can_view_user(viewer, owner)
    return checkin_service.get_checkins_for_user(db, user_id)


@router.get("/{checkin_id}", response_model=CheckinOut)
def get_checkin(
    checkin_id: int,
    db: Session = Depends(get_db),
    viewer: User = Depends(get_current_user),
):
    return get_visible_checkin(db, checkin_id, viewer)


@router.patch("/{checkin_id}/review", response_model=CheckinOut)
@limiter.limit(RATE_LIMIT_WRITE)
def review_checkin(
    request: Request,
    checkin_id: int,
    payload: ReviewRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    reviewer: User = Depends(require_reviewer),
):
    checkin = db.get(Checkin, checkin_id)
    if not checkin:
        raise CheckinNotFoundError()

    # 🔒 Scope check: admins anyone, managers their direct reports, never yourself
    if checkin.user_id == reviewer.id or not reviewer.manages(checkin.user):
        raise HTTPException(status_code=403, detail="You cannot review this check-in")

    reviewed = review_service.review_checkin(
        db,
        checkin_id,
        reviewer.id,
        outcome=payload.outcome,
        comments=payload.comments,
        response_comments=payload.response_comments,
        response_flags=payload.response_flags,
    )

    # 🔔 Author notice runs after the response, its failure never undoes the review
    background_tasks.add_task(notify_checkin_reviewed, reviewed.id)
    return reviewed


@router.get("/{checkin_id}/comments", response_model=List[CommentOut])
def checkin_comments(
    checkin_id: int,
    db: Session = Depends(get_db),
    viewer: User = Depends(get_current_user),
):
    get_visible_checkin(db, checkin_id, viewer)
    return comment_service.list_comments(db, checkin_id)


@router.post("/{checkin_id}/comments", response_model=CommentOut, status_code=201)
@limiter.limit(RATE_LIMIT_WRITE)
def add_checkin_comment(
    request: Request,
    checkin_id: int,
    payload: CommentRequest,
    db: Session = Depends(get_db),
    author: User = Depends(get_current_user),
):
    get_visible_checkin(db, checkin_id, author)
    return comment_service.create_comment(db, checkin_id, author.id, payload.content)
