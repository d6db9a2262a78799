# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from whirkplace.models.database import get_db
from whirkplace.models.user import User
from whirkplace.schemas.checkin_schemas import CommentOut, CommentRequest
from whirkplace.services import comment_service
from whirkplace.utils.auth_utils import get_current_user
from whirkplace.utils.rate_limit_utils import RATE_LIMIT_WRITE, limiter

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.patch("/{comment_id}", response_model=CommentOut)
@limiter.limit(RATE_LIMIT_WRITE)
def edit_comment(
    request: Request,
    comment_id: int,
    payload: CommentRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return comment_service.update_comment(db, comment_id, user.id, payload.content)


@router.delete("/{comment_id}")
@limiter.limit(RATE_LIMIT_WRITE)
def remove_comment(
    request: Request,
    comment_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    comment_service.delete_comment(db, comment_id, user.id)
    return {"status": "deleted"}
