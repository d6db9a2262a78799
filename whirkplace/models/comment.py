# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from whirkplace.models.database import Base
from whirkplace.utils.encryption import EncryptedText  # 🔐 Encryption utils

class Comment(Base):
    __tablename__ = "checkin_comments"

    id = Column(Integer, primary_key=True, index=True)
    checkin_id = Column(Integer, ForeignKey("checkins.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    content = Column(EncryptedText, nullable=False)  # 🔐 Encrypted

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    checkin = relationship("Checkin", back_populates="comments")
    author = relationship("User")
