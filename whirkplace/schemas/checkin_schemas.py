# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict
from datetime import date, datetime


class ResponseFlag(BaseModel):
    add_to_one_on_one: bool = False
    flag_for_follow_up: bool = False


class CheckinSubmitRequest(BaseModel):
    week_of: Optional[str] = None  # any day of the week; defaults to the current week
    overall_mood: int
    responses: Dict[str, str]
    winning_next_week: Optional[str] = None


class ReviewRequest(BaseModel):
    outcome: str  # "approve" | "reject"
    comments: Optional[str] = ""
    response_comments: Dict[str, str] = {}
    response_flags: Dict[str, ResponseFlag] = {}


class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    week_of: date
    overall_mood: int
    responses: Dict[str, str]
    question_snapshots: Dict[str, str]
    winning_next_week: Optional[str] = None
    due_date: date
    submitted_at: Optional[datetime] = None
    submitted_on_time: bool
    review_status: str
    review_comments: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    review_due_date: Optional[date] = None
    reviewed_on_time: Optional[bool] = False
    response_comments: Dict[str, str]
    response_flags: Dict[str, ResponseFlag]
    created_at: Optional[datetime] = None


class SubmissionWeek(BaseModel):
    week_start: date  # Saturday
    week_end: date  # following Saturday, exclusive
    week_of: date  # Friday
    label: str


class SubmissionWindow(BaseModel):
    current_week: Optional[SubmissionWeek] = None
    late_weeks: List[SubmissionWeek] = []
    submission_required: bool = False
    on_vacation: bool = False


class MissingCheckinOut(BaseModel):
    user_id: int
    name: str
    email: str
    week_of: date
    on_vacation: bool


class CommentRequest(BaseModel):
    content: str


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    checkin_id: int
    user_id: int
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
