# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime


class QuestionCreateRequest(BaseModel):
    text: str
    order: int = 0


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    is_active: bool
    order: int
    created_by: int


class VacationRequest(BaseModel):
    week_of: str
    note: Optional[str] = None


class VacationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    week_of: date
    note: Optional[str] = None
    created_at: Optional[datetime] = None
