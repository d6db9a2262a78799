# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from datetime import datetime
from sqlalchemy.orm import Session
from whirkplace.models.checkin import Checkin
from whirkplace.models.comment import Comment
from whirkplace.utils.errors import (
    CheckinNotFoundError,
    CommentNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 2000


def _clean_content(content: str) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment cannot be empty.")
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError("Comment too long.")
    return content


def _get_own_comment(db: Session, comment_id: int, author_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if not comment:
        raise CommentNotFoundError()
    if comment.user_id != author_id:
        raise PermissionDeniedError("Only the author can change this comment.")
    return comment


def create_comment(db: Session, checkin_id: int, author_id: int, content: str) -> Comment:
    content = _clean_content(content)
    if not db.get(Checkin, checkin_id):
        raise CheckinNotFoundError()

    comment = Comment(checkin_id=checkin_id, user_id=author_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info(f"💬 Comment {comment.id} added to check-in {checkin_id} by user {author_id}")
    return comment


def list_comments(db: Session, checkin_id: int):
    return (
        db.query(Comment)
        .filter(Comment.checkin_id == checkin_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def update_comment(db: Session, comment_id: int, author_id: int, content: str) -> Comment:
    content = _clean_content(content)
    comment = _get_own_comment(db, comment_id, author_id)
    comment.content = content
    comment.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: int, author_id: int):
    comment = _get_own_comment(db, comment_id, author_id)
    db.delete(comment)
    db.commit()
    logger.info(f"🗑️ Comment {comment_id} deleted by user {author_id}")
