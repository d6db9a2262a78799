# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
import os
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.orm import Session
from whirkplace.models.database import SessionLocal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Infra"])


@router.get("/healthz")
def health_check():
    db: Session = SessionLocal()
    result = {
        "db_connection": False,
        "push_configured": bool(os.getenv("FIREBASE_ADMIN_JSON")),
    }

    try:
        # ✅ Check DB read
        db.execute(text("SELECT 1"))
        result["db_connection"] = True

        return {
            "status": "ok" if result["db_connection"] else "partial",
            "details": result
        }

    except Exception as e:
        logger.error(f"🛑 Health check failed: {e}")
        return {
            "status": "error",
            "error": str(e),
            "details": result
        }

    finally:
        db.close()
