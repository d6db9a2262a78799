# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from sqlalchemy.orm import Session
from whirkplace.models.question import Question
from whirkplace.utils.errors import QuestionNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def get_active_questions(db: Session):
    return (
        db.query(Question)
        .filter(Question.is_active == True)
        .order_by(Question.order, Question.id)
        .all()
    )


def create_question(db: Session, text: str, created_by: int, order: int = 0) -> Question:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Question text is required.")

    question = Question(text=text, order=order, created_by=created_by, is_active=True)
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info(f"📝 Question {question.id} created by user {created_by}")
    return question


def deactivate_question(db: Session, question_id: int) -> Question:
    # Past check-ins keep their question_snapshots, so nothing else needs rewriting
    question = db.get(Question, question_id)
    if not question:
        raise QuestionNotFoundError()
    question.is_active = False
    db.commit()
    db.refresh(question)
    return question
