# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from whirkplace.models.database import Base
from whirkplace.utils.encryption import EncryptedText  # 🔐 Encryption utils

class NotificationLog(Base):
    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    notification_type = Column(String, default="generic")  # e.g., checkin_reviewed, checkin_reminder
    checkin_id = Column(Integer, ForeignKey("checkins.id"), nullable=True)

    content = Column(EncryptedText, nullable=True)  # 🔐 Encrypted transparently

    delivered = Column(Boolean, default=False)  # push accepted by FCM
    timestamp = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="notifications")
