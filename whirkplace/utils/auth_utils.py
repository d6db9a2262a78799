# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import Depends, HTTPException, Header
from sqlalchemy.orm import Session
from whirkplace.models.database import get_db
from whirkplace.models.user import User
from whirkplace.utils.jwt_utils import verify_access_token


# ✅ Dependency to extract token payload
def require_token(authorization: str = Header(...)):
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization format")
    token = authorization.replace("Bearer ", "", 1)
    return verify_access_token(token)


# ✅ The caller, passed explicitly into every service call
def get_current_user(
    user_data: dict = Depends(require_token),
    db: Session = Depends(get_db),
) -> User:
    try:
        user_id = int(user_data["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token subject")

    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found")
    return user


# ✅ Manager/admin guard
def require_reviewer(user: User = Depends(get_current_user)) -> User:
    if not user.can_review:
        raise HTTPException(status_code=403, detail="Only managers and admins can do this")
    return user


def ensure_can_view_user(viewer: User, owner: User):
    """Users see their own check-ins; reviewers see the people they manage."""
    if viewer.id == owner.id or viewer.manages(owner):
        return
    raise HTTPException(status_code=403, detail="You cannot view this user's check-ins")
