# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from whirkplace.models.database import Base


class ReviewStatus:
    PENDING = "pending"
    REVIEWED = "reviewed"

    ALL = (PENDING, REVIEWED)


class ReviewOutcome:
    APPROVE = "approve"
    REJECT = "reject"

    ALL = (APPROVE, REJECT)


class Checkin(Base):
    __tablename__ = "checkins"
    __table_args__ = (
        # One check-in per user per reporting week
        UniqueConstraint("user_id", "week_of", name="uq_checkins_user_week_of"),
        Index("ix_checkins_review_status", "review_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    week_of = Column(Date, nullable=False)  # Friday closing the Saturday..Friday week
    overall_mood = Column(Integer, nullable=False)  # 1-5

    responses = Column(JSON, nullable=False, default=dict)  # question_id -> answer
    question_snapshots = Column(JSON, nullable=False, default=dict)  # question_id -> text at submission
    winning_next_week = Column(Text, nullable=True)

    due_date = Column(Date, nullable=False)
    submitted_at = Column(DateTime, nullable=True)
    submitted_on_time = Column(Boolean, default=False)

    # Review fields, set once on pending -> reviewed
    review_status = Column(String, nullable=False, default=ReviewStatus.PENDING)
    review_comments = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    review_due_date = Column(Date, nullable=True)
    reviewed_on_time = Column(Boolean, default=False)
    response_comments = Column(JSON, nullable=False, default=dict)  # question_id -> comment
    response_flags = Column(JSON, nullable=False, default=dict)  # question_id -> {add_to_one_on_one, flag_for_follow_up}

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="checkins", foreign_keys=[user_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by])
    comments = relationship(
        "Comment",
        back_populates="checkin",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    @property
    def is_pending(self) -> bool:
        return self.review_status == ReviewStatus.PENDING

    def __repr__(self):
        return f"<Checkin id={self.id} user={self.user_id} week_of={self.week_of} status={self.review_status}>"
