# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from whirkplace.models.vacation import Vacation
from whirkplace.utils.week_utils import DateLike, canonical_week_of

logger = logging.getLogger(__name__)


def is_user_on_vacation(db: Session, user_id: int, day: DateLike) -> bool:
    week_of = canonical_week_of(day)
    return (
        db.query(Vacation)
        .filter(Vacation.user_id == user_id, Vacation.week_of == week_of)
        .first()
        is not None
    )


def list_vacation_weeks(db: Session, user_id: int):
    return db.query(Vacation).filter(Vacation.user_id == user_id).order_by(Vacation.week_of.desc()).all()


def add_vacation_week(db: Session, user_id: int, day: DateLike, note: str = None) -> Vacation:
    """Marks the week containing ``day`` as vacation. Repeated calls update the note."""
    week_of = canonical_week_of(day)
    existing = (
        db.query(Vacation)
        .filter(Vacation.user_id == user_id, Vacation.week_of == week_of)
        .first()
    )
    if existing:
        existing.note = note
        db.commit()
        db.refresh(existing)
        return existing

    vacation = Vacation(user_id=user_id, week_of=week_of, note=note)
    db.add(vacation)
    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same week first
        db.rollback()
        return (
            db.query(Vacation)
            .filter(Vacation.user_id == user_id, Vacation.week_of == week_of)
            .one()
        )
    db.refresh(vacation)
    logger.info(f"🏖️ User {user_id} on vacation for week of {week_of}")
    return vacation


def remove_vacation_week(db: Session, user_id: int, day: DateLike) -> bool:
    week_of = canonical_week_of(day)
    deleted = (
        db.query(Vacation)
        .filter(Vacation.user_id == user_id, Vacation.week_of == week_of)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
