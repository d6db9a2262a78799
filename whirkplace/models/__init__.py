# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User, UserRole
from .checkin import Checkin, ReviewStatus, ReviewOutcome
from .comment import Comment
from .question import Question
from .vacation import Vacation
from .notification import NotificationLog

__all__ = [
    "User",
    "UserRole",
    "Checkin",
    "ReviewStatus",
    "ReviewOutcome",
    "Comment",
    "Question",
    "Vacation",
    "NotificationLog",
]
