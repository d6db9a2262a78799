# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from whirkplace.models.database import get_db
from whirkplace.models.user import User
from whirkplace.schemas.team_schemas import VacationOut, VacationRequest
from whirkplace.services import vacation_service
from whirkplace.utils.auth_utils import get_current_user

router = APIRouter(prefix="/vacations", tags=["Vacations"])


@router.get("", response_model=List[VacationOut])
def my_vacations(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return vacation_service.list_vacation_weeks(db, user.id)


@router.post("", response_model=VacationOut, status_code=201)
def mark_vacation(
    payload: VacationRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return vacation_service.add_vacation_week(db, user.id, payload.week_of, payload.note)


@router.delete("")
def unmark_vacation(
    week_of: str = Query(..., description="Any day of the vacation week, YYYY-MM-DD"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not vacation_service.remove_vacation_week(db, user.id, week_of):
        raise HTTPException(status_code=404, detail="No vacation recorded for that week")
    return {"status": "deleted"}
