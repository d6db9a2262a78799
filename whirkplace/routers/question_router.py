# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from whirkplace.models.database import get_db
from whirkplace.models.user import User, UserRole
from whirkplace.schemas.team_schemas import QuestionCreateRequest, QuestionOut
from whirkplace.services import question_service
from whirkplace.utils.auth_utils import get_current_user, require_reviewer

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.get("/active", response_model=List[QuestionOut])
def active_questions(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return question_service.get_active_questions(db)


@router.post("", response_model=QuestionOut, status_code=201)
def add_question(
    payload: QuestionCreateRequest,
    db: Session = Depends(get_db),
    reviewer: User = Depends(require_reviewer),
):
    return question_service.create_question(db, payload.text, reviewer.id, payload.order)


@router.patch("/{question_id}/deactivate", response_model=QuestionOut)
def deactivate_question(
    question_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if user.role != UserRole.admin:
        raise HTTPException(status_code=403, detail="Only admins can retire questions")
    return question_service.deactivate_question(db, question_id)
