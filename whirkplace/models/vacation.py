# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Date, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from whirkplace.models.database import Base

class Vacation(Base):
    __tablename__ = "vacations"
    __table_args__ = (
        UniqueConstraint("user_id", "week_of", name="uq_vacations_user_week_of"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    week_of = Column(Date, nullable=False)  # same Friday key as Checkin.week_of
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="vacations")
