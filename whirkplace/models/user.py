# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Optional
from whirkplace.models.database import Base
import enum

class UserRole(enum.Enum):
    member = "member"
    manager = "manager"
    admin = "admin"

REVIEWER_ROLES = (UserRole.manager, UserRole.admin)

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, default="")
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole), default=UserRole.member, nullable=False)
    manager_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # ✅ For FCM _ Cloud Firebase Token
    fcm_token: Optional[str] = Column(String)
    push_notifications_enabled = Column(Boolean, default=True)

    # ✅ Relationships
    manager = relationship("User", remote_side=[id], backref="reports")
    checkins = relationship(
        "Checkin",
        back_populates="user",
        cascade="all, delete-orphan",
        foreign_keys="Checkin.user_id",
    )
    notifications = relationship("NotificationLog", back_populates="user", cascade="all, delete-orphan")
    vacations = relationship("Vacation", back_populates="user", cascade="all, delete-orphan")

    @property
    def can_review(self) -> bool:
        return self.role in REVIEWER_ROLES

    def manages(self, other: "User") -> bool:
        """Admins review everyone; managers only their direct reports."""
        if self.role == UserRole.admin:
            return True
        return self.role == UserRole.manager and other.manager_id == self.id

    def __repr__(self):
        return f"<User id={self.id} role={self.role.value} manager={self.manager_id}>"
